from typing import Any, Dict, Type, List
from pydantic import BaseModel, create_model
import yaml
from pathlib import Path
import os
import re

def load_yaml(file_path: str) -> dict:
    config_path = Path(file_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file '{file_path}' does not exist.")

    with config_path.open('r') as f:
        config_data = yaml.safe_load(f)

    if not isinstance(config_data, dict):
        raise ValueError("Configuration file must contain a YAML dictionary at the root.")

    return config_data

VARIABLE_PATTERN = re.compile(r'\$\{([^}]+)\}')

def resolve_variable(var_name: str, root_config: Dict[str, Any]) -> Any:
    """
    Resolves a `${Section.KEY}` reference against the root of the configuration.

    :param var_name: Dotted path of the referenced key.
    :param root_config: The whole configuration document.
    :return: The referenced value.
    """
    value = root_config
    for key in var_name.split('.'):
        if not isinstance(value, dict) or key not in value:
            raise ValueError(f"Variable '{var_name}' not found in configuration.")
        value = value[key]
    return value

def interpolate_config(config: Any, root_config: Dict[str, Any] = None, visited: set = None) -> Any:
    """
    Recursively interpolates `${...}` variables in the config dictionary.

    :param config: The (sub-)configuration to interpolate.
    :param root_config: The whole configuration document, used for lookups.
    :param visited: Variables currently being resolved, to detect circular references.
    :return: The interpolated configuration.
    """
    if root_config is None:
        root_config = config
    if visited is None:
        visited = set()

    if isinstance(config, dict):
        for key, value in config.items():
            config[key] = interpolate_config(value, root_config, visited)
        return config
    elif isinstance(config, list):
        return [interpolate_config(item, root_config, visited) for item in config]
    elif isinstance(config, str):
        value = config
        for var in VARIABLE_PATTERN.findall(config):
            if var in visited:
                raise ValueError(f"Circular reference detected for variable '{var}'.")

            var_value = resolve_variable(var, root_config)

            # Referenced value may itself hold placeholders
            if isinstance(var_value, str) and VARIABLE_PATTERN.search(var_value):
                visited.add(var)
                var_value = interpolate_config(var_value, root_config, visited)
                visited.remove(var)

            if not isinstance(var_value, (str, int, float)):
                raise ValueError(f"Variable '{var}' is of unsupported type {type(var_value)} for interpolation.")

            value = value.replace(f"${{{var}}}", str(var_value))
        return value
    else:
        return config

def generate_pydantic_model(
    model_name: str,
    data: Any,
    model_cache: Dict[str, Type[BaseModel]] = None
) -> Type[BaseModel]:
    """
    Recursively generates Pydantic models from a nested dictionary,
    handling lists appropriately.

    :param model_name: Name of the Pydantic model to create.
    :param data: The data to create the model from (dict, list, or primitive).
    :param model_cache: A cache to store already created models.
    :return: A Pydantic BaseModel subclass.
    """
    if model_cache is None:
        model_cache = {}

    if isinstance(data, dict):
        fields = {}
        for key, value in data.items():
            field_name = key.replace('-', '_').replace(' ', '_')

            if isinstance(value, dict):
                nested_model_name = f"{model_name}_{key.capitalize()}"
                nested_model = model_cache.get(nested_model_name) \
                    or generate_pydantic_model(nested_model_name, value, model_cache)
                fields[field_name] = (nested_model, ...)
            elif isinstance(value, list):
                fields[field_name] = (generate_pydantic_model(f"{model_name}_{key.capitalize()}", value, model_cache), ...)
            elif value is None:
                fields[field_name] = (Any, None)
            else:
                fields[field_name] = (type(value), ...)

        model = create_model(model_name, **fields)
        model_cache[model_name] = model
        return model

    elif isinstance(data, list):
        if len(data) > 0 and isinstance(data[0], dict):
            nested_model = generate_pydantic_model(f"{model_name}Item", data[0], model_cache)
            return List[nested_model]
        else:
            return List[type(data[0])] if len(data) > 0 else List[Any]

    else:
        return type(data)

def generate_config_model(config_data: dict) -> Type[BaseModel]:
    """
    Generates the root Pydantic model for the configuration.

    :param config_data: The configuration data as a dictionary.
    :return: The root Pydantic model class.
    """
    return generate_pydantic_model("AppConfig", config_data)

def load_settings(file_path: str) -> BaseModel:
    config_data = load_yaml(file_path)
    interpolated_config = interpolate_config(config_data)
    AppConfigModel = generate_config_model(interpolated_config)
    return AppConfigModel(**interpolated_config)

CONFIG_FILE_PATH = os.getenv('CONFIG_FILE_PATH', str(Path(__file__).parent / 'config.yaml'))

settings = load_settings(CONFIG_FILE_PATH)
