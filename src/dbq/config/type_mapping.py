"""
Configuration for reported type name aliases.

A JSON file maps extra driver type names onto the built-in type classes:

    {"aliases": {"UUID": "text", "MONEY": "float", "SERIAL": "integer"}}
"""
import json
import logging
import os
import pathlib

logger = logging.getLogger(__name__)

ENV_VAR = 'DBQ_TYPE_MAPPING'


class TypeMappingConfig:
    """Configuration for custom type name aliases"""

    _instance = None

    @classmethod
    def get_instance(cls):
        """Get singleton instance"""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls):
        """Drop the singleton so the next access reloads configuration"""
        cls._instance = None

    def __init__(self, config_file=None):
        self._aliases: dict[str, str] = {}

        if config_file:
            self.load_config(config_file)
            return

        default_locations = [
            os.environ.get(ENV_VAR),
            pathlib.Path('~/.config/dbq/type_mapping.json').expanduser(),
            '/etc/dbq/type_mapping.json',
            'type_mapping.json',
        ]

        for location in default_locations:
            if location and pathlib.Path(location).exists():
                self.load_config(location)
                break

    def load_config(self, config_file):
        """Load aliases from file, merging with those already known"""
        try:
            with pathlib.Path(config_file).open() as f:
                config = json.load(f)

            for type_name, type_class in config.get('aliases', {}).items():
                self.add_alias(type_name, type_class)

            logger.info(f'Loaded type mapping configuration from {config_file}')
        except Exception as e:
            logger.warning(f'Failed to load type mapping config: {e}')

    def add_alias(self, type_name, type_class):
        """Map a reported type name onto a type class name"""
        self._aliases[type_name.upper()] = type_class.lower()

    def get_alias(self, type_name):
        """Get the configured type class name for a reported type name"""
        if not type_name:
            return None
        return self._aliases.get(type_name.upper())

    @property
    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)
