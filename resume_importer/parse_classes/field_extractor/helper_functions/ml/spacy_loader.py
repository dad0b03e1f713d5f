"""spacy_loader.py
Used to load spacy models with optional cache.
"""
from typing import Dict, Optional
import sys
import subprocess

import spacy
from spacy.util import is_package
from spacy.language import Language


def load_spacy_model(
    model_name: str,
    loaded_spacy_models: Optional[Dict[str, Language]] = None
) -> Language:
    """
    Load a SpaCy model, optionally using a provided cache dictionary.

    If the model is already present in `loaded_spacy_models`, it is returned
    directly. Otherwise, the model is downloaded if missing, loaded from SpaCy,
    and stored in the dictionary (if one was provided).

    Args:
        model_name (str): Name of the SpaCy model to load (e.g., "en_core_web_sm").
        loaded_spacy_models (Optional[Dict[str, Language]]): Optional dictionary
            to cache loaded models. Keys are model names, values are SpaCy
            Language objects.

    Returns:
        Language: Loaded SpaCy model.

    Raises:
        RuntimeError: If the model cannot be downloaded or fails to load.
    """
    # Return cached model if available
    if loaded_spacy_models is not None and model_name in loaded_spacy_models:
        return loaded_spacy_models[model_name]

    # Check if package is installed
    if not is_package(model_name):
        try:
            subprocess.run(
                [sys.executable, "-m", "spacy", "download", model_name],
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise RuntimeError(f"Failed to download SpaCy model '{model_name}': {e}")

    # Load model
    try:
        nlp_model = spacy.load(model_name)
    except Exception as e:
        raise RuntimeError(f"Failed to load SpaCy model '{model_name}': {e}")

    # Store in cache if provided
    if loaded_spacy_models is not None:
        loaded_spacy_models[model_name] = nlp_model

    return nlp_model


def preload_spacy_models(
    field_extractor: "FieldExtractor",  # must be a FieldExtractor child class
    loaded_spacy_models: Dict[str, Language],
) -> None:
    """
    Load every SpaCy model the extractor needs for its current extraction
    method into `loaded_spacy_models` (modified in place).

    Args:
        field_extractor: An instance of a FieldExtractor child class.
        loaded_spacy_models: Cache of loaded SpaCy models keyed by model name.
    """
    # Get the extraction_method in provided field_extractor
    method = getattr(field_extractor, "extraction_method", None)
    if method is None:
        return

    # Get list of REQUIRED_ML_MODELS for the current field_extractor based on its extraction_method
    required_models = getattr(field_extractor, "REQUIRED_ML_MODELS", {}).get(method, {})
    spacy_models = required_models.get("spacy", [])

    # Load the model if it isn't already pre-loaded
    for model_name in spacy_models:
        if model_name not in loaded_spacy_models:
            loaded_spacy_models[model_name] = load_spacy_model(model_name, loaded_spacy_models)
