"""Document commands: upload, search, list, analyze, summarize and create."""

from voicecommands.commands.parsers.base import RuleMatch, match_rules, original, phrase, rule
from voicecommands.commands.parsers.types import ParsedIntent

_DOC_NOUN = r"(?:documents?|docs?|files?|pdfs?|contracts?|reports?)"
_CATEGORY_NOUNS = frozenset({"receipt", "invoice", "contract", "image", "photo"})
_GENERIC_CATEGORY_WORDS = frozenset({"the", "my", "all", "uploaded", "recent", "new"})


def _upload_category(m: RuleMatch) -> str | None:
    category = phrase("category")(m)
    if category:
        return category
    kind = m.group("kind")
    return kind if kind in _CATEGORY_NOUNS else None


def _list_category(m: RuleMatch) -> str | None:
    value = m.group("category")
    if value is None or value in _GENERIC_CATEGORY_WORDS:
        return None
    return value


RULES = (
    rule(
        r"^(?:upload|attach)\s+(?:a\s+|an\s+|the\s+|my\s+|some\s+)?(?:new\s+)?"
        r"(?P<kind>file|document|doc|pdf|receipt|invoice|contract|image|photo)s?"
        r"(?:\s+(?:to|for|under|in|as)\s+(?P<category>.+))?$",
        "upload_file",
        0.9,
        category=_upload_category,
    ),
    rule(r"^(?:upload|attach)(?:\s+something)?$", "upload_file", 0.85),
    rule(
        r"^(?:search|find|look\s+for|look\s+up)\s+(?:for\s+)?(?:a\s+|the\s+|my\s+)?(?:documents?|files?|docs?)\s+"
        r"(?:about|for|on|with|containing|mentioning|named|called)?\s*(?P<query>.+)$",
        "search_documents",
        0.9,
        query=original("query"),
    ),
    rule(
        r"^(?:search|find)\s+(?:for\s+)?(?P<query>.+?)\s+in\s+(?:my\s+|the\s+)?(?:documents|files|docs)$",
        "search_documents",
        0.9,
        query=original("query"),
    ),
    rule(
        r"\b(?:show|list|view|see|open)\s+(?:me\s+)?(?:all\s+)?(?:my\s+|the\s+)?(?:(?P<category>[\w-]+)\s+)?"
        r"(?:documents|files|docs)\b",
        "list_documents",
        0.9,
        category=_list_category,
    ),
    rule(
        r"^(?:analy[sz]e|review|inspect|examine)\s+(?:the\s+|this\s+|that\s+|my\s+)?" + _DOC_NOUN
        + r"(?:\s+#?(?P<id>[\w-]+))?$",
        "analyze_document",
        0.9,
        document_id=phrase("id"),
    ),
    rule(
        r"^(?:summari[sz]e|give\s+me\s+a\s+summary\s+of)\s+(?:the\s+|this\s+|that\s+|my\s+)?" + _DOC_NOUN
        + r"(?:\s+#?(?P<id>[\w-]+))?$",
        "summarize_document",
        0.9,
        document_id=phrase("id"),
    ),
    rule(
        r"^(?:create|write|draft|start|new)\s+(?:a\s+|an\s+|new\s+)*"
        r"(?:(?P<doctype>proposal|report|memo|contract|letter|brief|plan)\s+)?(?:document|doc)\s+"
        r"(?:called\s+|titled\s+|named\s+|about\s+|for\s+|on\s+)?(?P<title>.+)$",
        "create_document",
        0.85,
        title=original("title"),
        doc_type=phrase("doctype"),
    ),
    rule(
        r"^(?:create|write|draft)\s+(?:a\s+|an\s+|new\s+)*(?P<doctype>proposal|memo|letter|brief)\s+"
        r"(?:called\s+|titled\s+|about\s+|for\s+|on\s+)(?P<title>.+)$",
        "create_document",
        0.85,
        title=original("title"),
        doc_type=phrase("doctype"),
    ),
)


def parse(normalized: str, original_text: str) -> ParsedIntent | None:
    return match_rules(RULES, normalized, original_text)
