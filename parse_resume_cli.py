"""parse_resume_cli.py
Run ResumeParserFramework from the command line and print the ParseResults as JSON.
Example: `python parse_resume_cli.py path/to/resume.pdf [path/to/other.docx ...]`
"""
import os
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"

import json
import sys

from resume_importer.models import FileUpload
from resume_importer.parse_classes.resume_parse_framework import ResumeParserFramework


def main():
    if len(sys.argv) < 2:
        print("Usage: python parse_resume_cli.py <file_path> [<file_path> ...]")
        sys.exit(1)

    file_paths = sys.argv[1:]
    missing = [path for path in file_paths if not os.path.isfile(path)]
    if missing:
        print(f"File(s) not found: {', '.join(missing)}")
        sys.exit(1)

    # Initialize the parser
    resume_parser_framework = ResumeParserFramework()

    uploads = [FileUpload.from_path(path) for path in file_paths]
    if len(uploads) == 1:
        results = [resume_parser_framework.parse_resume(uploads[0])]
    else:
        results = resume_parser_framework.parse_multiple_resumes(uploads)

    # Print the results
    output = []
    for path, result in zip(file_paths, results):
        payload = result.to_dict()
        payload["file"] = path
        payload["stats"] = resume_parser_framework.get_parsing_stats(result).to_dict()
        output.append(payload)

    print(json.dumps(output[0] if len(output) == 1 else output, indent=2))
    sys.exit(0 if all(result.success for result in results) else 2)


if __name__ == "__main__":
    main()
