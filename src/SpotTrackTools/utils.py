# Standard library imports
import re
import copy
import logging
from typing import Dict, Any


def remove_file_extension(filename: str) -> str:
    """
    Remove table and config extensions from a filename.

    Args:
        filename (str): The input filename.

    Returns:
        str: Filename with the extension removed.
    """
    extensions = ["csv", "tsv", "yml", "yaml", "json"]
    pattern = r"\.(?:" + "|".join(extensions) + ")$"
    return re.sub(pattern, "", filename)


def unit_converter(
    value: float, conversion_factor: float = 1, to_unit: str = "pixel"
) -> float:
    """
    Convert a value between pixels and micrometers (um) using a conversion factor.

    Args:
        value (float): The value to be converted.
        conversion_factor (float, optional, default 1): The conversion factor between pixels and micrometers.
        to_unit (str, optional, default pixel): The target unit for conversion. Can be either 'pixel' or 'um'.

    Returns:
        float: The converted value in the specified unit.

    Raises:
        ValueError: If an invalid unit is provided.
    """

    if to_unit == "um":
        return value * conversion_factor
    elif to_unit == "pixel":
        return value / conversion_factor
    else:
        raise ValueError("Invalid unit. Choose either 'um' or 'pixel'.")


def update_config(
    target_dict: Dict[str, Any], override_dict: Dict[str, Any], logger: logging.Logger = None
) -> Dict[str, Any]:
    """
    Recursively update a nested dictionary with override values.

    Args:
        target_dict (Dict[str, Any]): The original dictionary to update.
        override_dict (Dict[str, Any]): Dictionary containing override values.
        logger (logging.Logger, optional): Logger for tracking changes.

    Returns:
        Dict[str, Any]: Updated dictionary with override values applied.
    """

    result = copy.deepcopy(target_dict)

    def _recursive_update(target: Dict[str, Any], override: Dict[str, Any], path: str = "") -> None:
        for key, value in override.items():
            current_path = f"{path}.{key}" if path else key

            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                _recursive_update(target[key], value, current_path)
            else:
                if key in target and logger:
                    old_value = target[key]
                    if old_value != value:
                        logger.info(f"Updating {current_path}: {old_value} -> {value}")
                elif logger:
                    logger.warning(f"Current path not found: {current_path}")
                target[key] = value

    _recursive_update(result, override_dict)
    return result
