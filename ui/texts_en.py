APP_TITLE = "Filament Ledger"

# Page titles
PAGE_SUMMARY = "Summary"
PAGE_ITEMS = "Items"
PAGE_ORDERS = "Orders"
PAGE_FILAMENTS = "Filaments"
PAGE_SETTINGS = "Settings"
PAGE_NOTES = "Notes"

# Buttons
BTN_SAVE_ITEM = "Save Item"
BTN_SAVE_ORDER = "Save Order"
BTN_SAVE_FILAMENT = "Save Filament"
BTN_SAVE_SETTINGS = "Save Settings"
BTN_SAVE_NOTE = "Save Note"
BTN_DELETE = "Delete"
BTN_DOWNLOAD_REPORT = "Download Excel Report"

# Guidance
MSG_NEED_ITEM = "Add an item before recording orders."
MSG_SELECT_FILAMENT = "Select a filament to calculate material cost."
MSG_SUCCESS_ITEM = "Item saved"
MSG_SUCCESS_ORDER = "Order saved"
MSG_SUCCESS_FILAMENT = "Filament saved"
MSG_SUCCESS_SETTINGS = "Settings saved"
MSG_SUCCESS_NOTE = "Note saved"
MSG_DELETED = "Deleted"
MSG_REPORT_FAILED = "Report could not be downloaded."
MSG_FILAMENT_IN_USE = "Error deleting filament. It might be in use by existing items."

# Validation
ERR_NAME_REQUIRED = "Item name is required."
ERR_COLOR_REQUIRED = "Color name is required."
ERR_PRICE_REQUIRED = "Price per kg must be greater than 0."
ERR_TITLE_REQUIRED = "Note title is required."
