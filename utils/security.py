"""
Security utilities for input sanitization
"""
import html
import bleach

# HTML tags allowed in user content
ALLOWED_HTML_TAGS = ['b', 'i', 'u', 'em', 'strong', 'p', 'br']


def sanitize_input(text, allow_html=False):
    """Sanitize user input to prevent XSS"""
    if not text or not isinstance(text, str):
        return text

    if allow_html:
        text = bleach.clean(text, tags=ALLOWED_HTML_TAGS, strip=True)
    else:
        text = html.escape(text, quote=False)

    return text.replace('\x00', '').strip()


def sanitize_profile(data, html_fields=('bio',)):
    """Sanitize free-text profile values, leaving other types untouched"""
    return {
        key: sanitize_input(value, allow_html=key in html_fields)
        for key, value in data.items()
    }
