from .config import ACS_2014_2018, DEFAULT_DATA_ROOT, TableConfig
from .loader import load_acs_table
from .table import CountyTable

__all__ = [
    "ACS_2014_2018",
    "CountyTable",
    "DEFAULT_DATA_ROOT",
    "TableConfig",
    "load_acs_table",
]
