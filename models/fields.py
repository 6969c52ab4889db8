"""
Field name constants for the persisted state document and JSON responses.
Single source of truth for key names used across the app.
"""

# Persisted state document
TOKENS = 'tokens'
SPREADSHEET_ID = 'spreadsheetId'
SPREADSHEET_RANGE = 'spreadsheetRange'
PERSON_MAPPING = 'personMapping'

# Credential set
ACCESS_TOKEN = 'access_token'
REFRESH_TOKEN = 'refresh_token'
TOKEN_TYPE = 'token_type'
EXPIRY = 'expiry'

# Attendance record (JSON)
DATE = 'date'
GROUP_A = 'groupA'
GROUP_B = 'groupB'

# Sheets API placeholder for a missing value
PLACEHOLDER = '#N/A'
