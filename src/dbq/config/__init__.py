from dbq.config.type_mapping import TypeMappingConfig

__all__ = ['TypeMappingConfig']
