"""
Prompts used to extract a structured RFP from the uploaded document.
"""

EXTRACTION_SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts the title, raw text, and "
    "requirements organized into categories from an RFP document."
)

EXTRACTION_USER_PROMPT = """Extract the title, the full raw text (as markdown) and every requirement a bidder must meet from the attached RFP document.

Assign each requirement a short category such as Compliance, Financial, Technical, Timeline or Experience.
Quote each requirement as closely to the document wording as possible."""
