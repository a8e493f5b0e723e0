API_PREFIX = '/api'

# Account
ACCOUNT_PREFIX = f'{API_PREFIX}/account'
ACCOUNT_LOGIN = f'{ACCOUNT_PREFIX}/login'
ACCOUNT_ME = f'{ACCOUNT_PREFIX}/me'
ACCOUNT_PASSWORD = f'{ACCOUNT_ME}/password'

# Session
SESSION_PREFIX = f'{API_PREFIX}/session'
SESSION_LOGOUT = f'{SESSION_PREFIX}/logout'
SESSION_PAGE_ACCESS = f'{SESSION_PREFIX}/access/{{page}}'

# Reservation
RESERVATION_PREFIX = f'{API_PREFIX}/reservation'
RESERVATION_AVAILABILITY = f'{RESERVATION_PREFIX}/availability'
RESERVATION_OCCUPANTS = f'{RESERVATION_PREFIX}/occupants'
RESERVATION_SUMMARY = f'{RESERVATION_PREFIX}/summary'
RESERVATION_WALK_IN = f'{RESERVATION_PREFIX}/walk-in'
RESERVATION_CANCEL = f'{RESERVATION_PREFIX}/{{reservation_id}}/cancel'
RESERVATION_NO_SHOW = f'{RESERVATION_PREFIX}/{{reservation_id}}/no-show'
RESERVATION_REBOOK = f'{RESERVATION_PREFIX}/{{reservation_id}}/rebook'

# Catalog
CATALOG_PREFIX = f'{API_PREFIX}/catalog'
CATALOG_LABS = f'{CATALOG_PREFIX}/labs'
CATALOG_LAB = f'{CATALOG_LABS}/{{code}}'
CATALOG_TIME_SLOTS = f'{CATALOG_PREFIX}/time-slots'
CATALOG_COLLEGES = f'{CATALOG_PREFIX}/colleges'
CATALOG_BUILDINGS = f'{CATALOG_PREFIX}/buildings'
