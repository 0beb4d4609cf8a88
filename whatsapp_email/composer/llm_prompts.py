"""
LLM Prompts for the Composer

Prompt builders for recipient extraction and email generation.
"""


def build_extraction_prompt(message: str) -> str:
    """
    Build the prompt asking the model to find a recipient and context.

    The model must answer with a JSON object or the literal null.

    Args:
        message: Raw WhatsApp message text

    Returns:
        Complete user prompt for LLM
    """
    return f"""Extract email recipient and context from this WhatsApp message: "{message}"
Return JSON format with 'recipient' and 'context' fields. If no valid email found, return null.
Example: {{"recipient": "john@email.com", "context": "follow up meeting"}}"""


EMAIL_WRITER_INSTRUCTIONS = """You are an AI assistant that creates professional emails. Given a brief context, generate:
1. A clear, professional subject line
2. A well-structured email body that expands on the context appropriately

Keep the tone professional but friendly. The email should be complete and ready to send."""


def build_email_generation_prompt(context: str) -> str:
    """
    Build the prompt that expands a short context into a full email.

    The response format is "Subject: <line>", a blank line, then the body.

    Args:
        context: Free-text context from the WhatsApp message

    Returns:
        Complete user prompt for LLM
    """
    return f"""{EMAIL_WRITER_INSTRUCTIONS}

Context: {context}

Please format your response as:
Subject: [your subject line]

[your email body content]"""
