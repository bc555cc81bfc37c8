"""CUE sheet decoding"""
import codecs

import chardet

# Legacy Shift_JIS family, Windows/WHATWG flavour
DEFAULT_CUE_ENCODING = "cp932"
AUTO_ENCODING = "auto"

# Below this chardet confidence the default encoding is used instead
MIN_CONFIDENCE = 0.5

_BOMS = (
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
)


def _sniff_bom(raw_data):
    for bom, encoding in _BOMS:
        if raw_data.startswith(bom):
            return encoding
    return None


def _detect_encoding(raw_data, log_func):
    result = chardet.detect(raw_data)
    if not result or not result.get('encoding'):
        log_func(f"⚠️ Could not detect encoding, using {DEFAULT_CUE_ENCODING}")
        return DEFAULT_CUE_ENCODING

    detected_encoding = result['encoding']
    confidence = result.get('confidence') or 0
    log_func(f"📝 CUE file encoding detected: {detected_encoding} (confidence: {confidence:.2%})")
    if confidence < MIN_CONFIDENCE:
        log_func(f"⚠️ Low confidence, using {DEFAULT_CUE_ENCODING}")
        return DEFAULT_CUE_ENCODING
    return detected_encoding


def resolve_encoding(raw_data, encoding=DEFAULT_CUE_ENCODING, log_func=None):
    """
    Pick the codec used to decode a CUE sheet.
    
    A byte order mark always wins. Otherwise the requested encoding is used,
    with "auto" delegating to chardet. Unknown codec names fall back to the
    default.
    
    Args:
        raw_data: Raw bytes of the CUE file
        encoding: Codec name or "auto"
        log_func: Optional function to call for logging messages
        
    Returns:
        A codec name known to Python
    """
    if log_func is None:
        log_func = lambda msg: None

    bom_encoding = _sniff_bom(raw_data)
    if bom_encoding:
        return bom_encoding

    if not encoding:
        return DEFAULT_CUE_ENCODING

    if encoding.lower() == AUTO_ENCODING:
        encoding = _detect_encoding(raw_data, log_func)

    try:
        codecs.lookup(encoding)
    except LookupError:
        log_func(f"⚠️ Unknown encoding {encoding!r}, using {DEFAULT_CUE_ENCODING}")
        return DEFAULT_CUE_ENCODING
    return encoding


def decode_cue_bytes(raw_data, encoding=DEFAULT_CUE_ENCODING, log_func=None):
    """Decode CUE sheet bytes to text, replacing anything undecodable"""
    codec = resolve_encoding(raw_data, encoding, log_func)
    try:
        return raw_data.decode(codec, errors="replace")
    except (LookupError, TypeError):
        # Non-text codecs such as base64 pass codecs.lookup but cannot decode to str
        if log_func is not None:
            log_func(f"⚠️ {codec!r} is not a text encoding, using {DEFAULT_CUE_ENCODING}")
        return raw_data.decode(DEFAULT_CUE_ENCODING, errors="replace")
