"""URL paths and DOM markers of the application under test.

These strings are the contract with the OrangeHRM UI. A change on the
application side (label text, marker classes) must be mirrored here.
"""

LOGIN_PATH = "/web/index.php/auth/login"
DASHBOARD_PATH = "/web/index.php/dashboard/index"
ADMIN_USERS_PATH = "/web/index.php/admin/viewSystemUsers"

ADMIN_USERS_URL_PART = "admin/viewSystemUsers"
DASHBOARD_URL_PART = "/dashboard"
LOGIN_URL_PART = "/auth/login"

# Login form
LOGIN_FORM = ".orangehrm-login-form"
LOGIN_USERNAME = 'input[name="username"]'
LOGIN_PASSWORD = 'input[name="password"]'
LOGIN_SUBMIT = 'button[type="submit"]'
LOGIN_ALERT = ".oxd-alert-content-text"
FIELD_ERROR = ".oxd-input-field-error-message"

# Dashboard
DASHBOARD_BREADCRUMB = ".oxd-topbar-header-breadcrumb-module"
QUICK_LAUNCH_CARD = ".orangehrm-quick-launch-card"
USER_MENU = ".oxd-userdropdown-tab"
LOGOUT_LINK = 'a[href*="logout"]'

# Search panel
FILTER_PANEL = ".oxd-table-filter-area"
FILTER_TOGGLE = ".oxd-table-filter-header-options .--toggle button"
SEARCH_BUTTON = 'button[type="submit"]:has-text("Search")'
RESET_BUTTON = 'button[type="button"]:has-text("Reset")'
AUTOCOMPLETE_OPTION = ".oxd-autocomplete-option"
SELECT_PLACEHOLDER = "-- Select --"
AUTOCOMPLETE_PENDING = "Searching...."
AUTOCOMPLETE_EMPTY = "No Records Found"

# Results area
TABLE_LOADER = ".oxd-table-loader"
TABLE_ROW = ".oxd-table-body .oxd-table-row"
TABLE_CELL = ".oxd-table-cell"
NO_RECORDS_MARKER = 'span.oxd-text--span:has-text("No Records")'
NO_RECORDS_TEXT = "No Records Found"

# Toasts
ERROR_TOAST = ".oxd-toast-content--error .oxd-text--toast-message"
INFO_TOAST = ".oxd-toast-content--info .oxd-text--toast-message"
TOAST_CLOSE = ".oxd-toast-close"
