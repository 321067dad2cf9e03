# Common utilities
from .config_loader import (
    CatalogSettings,
    catalog_settings_from_dict,
    load_catalog_settings,
    load_config,
    load_contact_settings,
)
from .consent import ConsentFlag
from .csv_utils import product_to_row, write_csv, write_products_csv
from .log_config import setup_logging
from .storage import FileStorage, MemoryStorage, SessionStorage
from .text_utils import normalize_text, split_list
