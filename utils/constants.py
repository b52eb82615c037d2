"""
utils/constants.py

Purpose: Centralized constants

- API error and result messages
- SMS message template
"""

# ============================================
# SMS TEMPLATE
# ============================================

# Android's SMS Retriever API reads the app hash from the last line
VERIFICATION_SMS_TEMPLATE = "[#] Use {code} as your code for the app!\n{app_hash}"


# ============================================
# REQUEST VALIDATION MESSAGES
# ============================================

MSG_REQUEST_FIELDS_REQUIRED = "Both client_secret and phone are required."
MSG_VERIFY_FIELDS_REQUIRED = "The client_secret, phone, and sms_message parameters are required"
MSG_RESET_FIELDS_REQUIRED = "The client_secret and phone parameters are required"
MSG_CLIENT_SECRET_MISMATCH = "The client_secret parameter does not match."


# ============================================
# VERIFICATION RESULT MESSAGES
# ============================================

MSG_VERIFY_FAILED = "Unable to validate code for this phone number"
MSG_RESET_FAILED = "Unable to reset code for this phone number"
