# utils/constants.py

# Raw UK HPI column names -> canonical names
RAW_DATE_COL = "Date"
RAW_REGION_COL = "RegionName"
RAW_TARGET_COL = "SalesVolume"

RAW_COLUMNS = {
    RAW_DATE_COL: "date",
    RAW_REGION_COL: "region",
    RAW_TARGET_COL: "sales_volume",
}

# Schema constants used by data_loader and others
DATE_COL = "date"
REGION_COL = "region"
DATE_FORMAT = "%d/%m/%Y"  # UK HPI dates are day/month/year

NA_VALUES = ["", "NA", "N/A", "na", "n/a", "NULL", "null", "-", "--"]

# Function-argument defaults; the CLI reads its settings from config.yaml
DEFAULT_DATASET = "data/UK-HPI-full-file-2023-06.csv"
DEFAULT_REGION = "United Kingdom"
PRIMARY_LAGS = 12

TRAIN_SUBSET = "train"
TEST_SUBSET = "test"
