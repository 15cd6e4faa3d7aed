import binascii


def decode_hex_text(hex_data: str) -> str | None:
    """
    Decodes a hex string into text, replacing invalid utf-8 sequences
    Returns None for odd length or non hex characters instead of raising
    """
    try:
        data: bytes = binascii.unhexlify(hex_data)
    except (binascii.Error, ValueError):
        return None
    return data.decode("utf-8", errors="replace")


def is_printable_ascii(text: str) -> bool:
    # ascii without C0 controls and DEL, so tab and newline fail too
    return all(32 <= ord(char) < 127 for char in text)


def extract_hidden_message(hex_data: str) -> str | None:
    text: str | None = decode_hex_text(hex_data)
    if text is None or not is_printable_ascii(text):
        return None
    return text
