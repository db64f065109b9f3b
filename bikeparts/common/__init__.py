# Common utilities
from .config_loader import (
    load_config,
    load_part_catalog,
    load_settings,
    load_vendor_profiles,
)
from .log_config import setup_logging
