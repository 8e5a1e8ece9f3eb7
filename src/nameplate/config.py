""" Nameplate configuration

Built-in defaults live in nameplate/data/config.toml. Callers can layer an
override file on top with load_config, after which config.Settings holds the
merged result as nested SimpleNamespaces, e.g.
Settings.conditions.POOL_SIZE
"""

import toml # type: ignore
import importlib.resources
import types
from typing import Dict, Optional, Any, List, TextIO

def merge(a:Dict[str, Any], b:Dict[str, Any], path:Optional[List[str]]=None) -> Dict[str, Any]:
    """ recursively merges b into a

    b[key] overrides a[key] if key present in both. raises an exception if
    b[key] and a[key] are not of the same type.

    inspired by https://stackoverflow.com/a/51653724/553580
    """

    if path is None: path = []
    for key in b:
        if key not in a:
            a[key] = b[key]
        elif isinstance(a[key], dict) and isinstance(b[key], dict):
            merge(a[key], b[key], path + [str(key)])
        elif a[key].__class__ == b[key].__class__:
            a[key] = b[key]
        elif a[key].__class__ == float and b[key].__class__ == int:
            # "CACHE_TTL = 60" for a float setting
            a[key] = float(b[key])
        else:
            dotted = '.'.join(path + [str(key)])
            raise ValueError(f'Conflict at {dotted}: expected {a[key].__class__.__name__}, got {b[key].__class__.__name__}')
    return a

def validate(config:Dict[str, Any]) -> None:
    conditions = config["conditions"]
    if conditions["POOL_SIZE"] < 1:
        raise ValueError(f'conditions.POOL_SIZE must be at least 1, got {conditions["POOL_SIZE"]}')
    if conditions["BORROW_TIMEOUT"] < 0:
        raise ValueError(f'conditions.BORROW_TIMEOUT must be non-negative, got {conditions["BORROW_TIMEOUT"]}')
    if conditions["CACHE_TTL"] <= 0:
        raise ValueError(f'conditions.CACHE_TTL must be positive, got {conditions["CACHE_TTL"]}')

def dict_to_simplenamespace(d:Dict[str, Any]) -> types.SimpleNamespace:
    """ Converts a dict recursively to a SimpleNamespace. """
    return types.SimpleNamespace(**{
        k: dict_to_simplenamespace(v) if isinstance(v, dict) else v
        for k, v in d.items()
    })

def default_config() -> Dict[str, Any]:
    return toml.loads(importlib.resources.files("nameplate.data").joinpath("config.toml").read_text())

def load_config(config_file:Optional[TextIO]=None) -> types.SimpleNamespace:
    config = default_config()
    if config_file:
        merge(config, toml.load(config_file))
    validate(config)

    global Settings
    Settings = dict_to_simplenamespace(config)

    return Settings

# it's ok to reload the config with a file elsewhere, but we start with the
# built-in config
Settings = load_config()
