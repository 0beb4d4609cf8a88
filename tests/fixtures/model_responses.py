"""
Model Response Fixtures for Testing

Raw model outputs for the extraction and email generation prompts.
"""

# =============================================================================
# Extraction (parser fallback)
# =============================================================================

EXTRACTION_VALID = '{"recipient": "a@b.com", "context": "c"}'

EXTRACTION_FENCED = """```json
{"recipient": "alice@example.org", "context": "send the signed contract"}
```"""

EXTRACTION_NULL = "null"

EXTRACTION_NOT_JSON = "I could not find an email address in that message."

EXTRACTION_MISSING_CONTEXT = '{"recipient": "a@b.com"}'

EXTRACTION_EMPTY_RECIPIENT = '{"recipient": "", "context": "c"}'

EXTRACTION_LIST = '[{"recipient": "a@b.com", "context": "c"}]'


# =============================================================================
# Email generation
# =============================================================================

GENERATED_EMAIL = """Subject: Follow-up on our meeting

Hi Bob,

Thank you for taking the time to meet with me yesterday.
I wanted to follow up on the points we discussed.

Best regards"""

GENERATED_EMAIL_BODY = """Hi Bob,

Thank you for taking the time to meet with me yesterday.
I wanted to follow up on the points we discussed.

Best regards"""

GENERATED_EMAIL_NO_SUBJECT = """Hi Bob,

Just a quick note about the quarterly report.

Thanks"""

GENERATED_EMAIL_NO_SUBJECT_PADDED = "\n\n  " + GENERATED_EMAIL_NO_SUBJECT + "\n\n   \n"

GENERATED_EMAIL_SUBJECT_NEXT_LINE = """Subject:

Hello

Body"""
