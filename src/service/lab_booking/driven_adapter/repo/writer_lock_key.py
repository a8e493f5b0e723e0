"""Per-collection writer lock keys. Acquire account before reservation when holding both."""

ACCOUNT_WRITER_KEY = 'account'
RESERVATION_WRITER_KEY = 'reservation'
