"""Configuration package for the scanroll attendance service."""
import os
from typing import List, Mapping, Type

from .development import DevelopmentConfig
from .production import ProductionConfig
from .testing import TestingConfig

config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

# Keys production refuses to start without
REQUIRED_IN_PRODUCTION = ('SECRET_KEY', 'JWT_SECRET_KEY', 'SQLALCHEMY_DATABASE_URI')

def get_config(config_name: str = None) -> Type:
    """Get configuration class based on environment.

    Falls back to ``SCANROLL_ENV``, then ``FLASK_ENV``, then development.
    """
    if config_name is None:
        config_name = os.getenv('SCANROLL_ENV') or os.getenv('FLASK_ENV', 'default')

    return config_map.get(config_name, config_map['default'])

def config_problems(config: Mapping) -> List[str]:
    """Human-readable problems with a loaded configuration."""
    problems = []

    if not config.get('DEBUG') and not config.get('TESTING'):
        for key in REQUIRED_IN_PRODUCTION:
            if not config.get(key):
                problems.append(f"{key} must be set")

    box_size = config.get('QR_BOX_SIZE', 10)
    if not isinstance(box_size, int) or box_size < 1:
        problems.append("QR_BOX_SIZE must be a positive integer")

    border = config.get('QR_BORDER', 4)
    if not isinstance(border, int) or border < 0:
        problems.append("QR_BORDER must be a non-negative integer")

    return problems
