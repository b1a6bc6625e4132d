"""
Display strings shared by the dashboard, reports and CSV adapters.
The shop operates in Japanese, so every user-facing label is Japanese.
"""

# Period card titles
PERIOD_LABELS = {
    "daily": "日次売上",
    "weekly": "週次売上",
    "monthly": "月次売上",
    "yearly": "年次売上",
}

# Period-over-period captions
COMPARISON_LABELS = {
    "daily": "前日比",
    "weekly": "前週比",
    "monthly": "前月比",
    "yearly": "前年比",
}

OVERVIEW_COMPARISON_LABEL = "前月比"
OVERVIEW_LABEL_SUFFIX = "の売上"

# Reports page captions
TODAY_SALES_LABEL = "本日の売上"
WEEKLY_LABEL_SUFFIX = "の週次売上"

# Shown when no product sold anything in the period
NO_TOP_PRODUCT = "なし"

# Product categories offered in the sale dialog
PRODUCT_CATEGORIES = ["CBD", "CBN", "CBG", "その他"]

# CSV headers
CSV_DATE = "日付"
CSV_PRODUCT = "製品名"
CSV_CATEGORY = "カテゴリ"
CSV_QUANTITY = "数量"
CSV_AMOUNT = "金額"
CSV_SALESPERSON = "販売者"

SALES_CSV_HEADERS = [CSV_DATE, CSV_PRODUCT, CSV_CATEGORY, CSV_QUANTITY, CSV_AMOUNT, CSV_SALESPERSON]
PURCHASES_CSV_HEADERS = [CSV_DATE, CSV_PRODUCT, CSV_AMOUNT]
REQUIRED_IMPORT_HEADERS = [CSV_DATE, CSV_PRODUCT, CSV_AMOUNT]

CSV_DATE_FORMAT = "%Y/%m/%d"

# Charts
PRODUCT_NAME_MAX_LENGTH = 15
THIS_YEAR_LABEL = "今年"
LAST_YEAR_LABEL = "前年"
