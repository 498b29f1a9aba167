"""DataMap models and loader."""

from .models import DataMap, DataMapItem, DataMapLine, EnumValue, load_data_map

__all__ = ["DataMap", "DataMapItem", "DataMapLine", "EnumValue", "load_data_map"]
