"""Keyword-table intent classification.

This is a substring heuristic, not language understanding. Every table is an
ordered list so the priority of each rule is visible and testable: for the
single-valued attributes (type, app type, domain, complexity) the first
matching row wins, for the multi-valued ones (technologies, features) every
matching row is kept.
"""

from ide_assistant.schemas.pipeline import UserIntent

# Priority chain: debugging requests must never be read as creation requests.
INTENT_TYPE_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("debug", ("debug", "error", "fix")),
    ("explain", ("explain", "what", "how")),
    ("modify_code", ("add", "modify", "change")),
    ("generate_feature", ("feature", "function")),
]
DEFAULT_INTENT_TYPE = "create_app"

APP_TYPE_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("e-commerce", ("shop", "store", "ecommerce", "commerce", "buy", "sell", "product", "cart")),
    ("social", ("social", "chat", "message", "feed", "post", "friend", "follow")),
    ("dashboard", ("dashboard", "admin", "analytics", "chart", "metric", "report")),
    ("blog", ("blog", "article", "post", "content", "news")),
    ("portfolio", ("portfolio", "showcase", "resume", "cv", "profile")),
    ("todo", ("todo", "task", "manage", "organize", "productivity")),
    ("game", ("game", "play", "score", "level", "player")),
    ("education", ("learn", "course", "lesson", "quiz", "education")),
    ("finance", ("finance", "money", "bank", "payment", "budget")),
]
DEFAULT_APP_TYPE = "web-app"

DOMAINS: list[str] = [
    "technology", "business", "education", "health", "finance",
    "entertainment", "travel", "food", "fashion", "sports",
    "real-estate", "automotive", "fitness", "music", "art",
]
DEFAULT_DOMAIN = "general"

TECHNOLOGIES: list[str] = ["react", "vue", "angular", "node", "express", "mongodb", "postgresql", "mysql"]

FEATURE_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("authentication", ("login", "auth", "user", "account")),
    ("payment", ("payment", "stripe", "checkout", "pay")),
    ("search", ("search", "find", "filter")),
    ("chat", ("chat", "message", "communication")),
    ("analytics", ("analytics", "tracking", "metrics")),
    ("api", ("api", "rest", "endpoint")),
    ("database", ("database", "storage", "data")),
    ("responsive", ("mobile", "responsive", "device")),
]

# "complex" is checked first, so it wins when both lists match.
COMPLEXITY_RULES: list[tuple[str, tuple[str, ...]]] = [
    ("complex", ("complex", "advanced", "enterprise", "scalable", "robust", "comprehensive")),
    ("simple", ("simple", "basic", "minimal", "quick")),
]
DEFAULT_COMPLEXITY = "moderate"


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _first_match(text: str, rules: list[tuple[str, tuple[str, ...]]]) -> str | None:
    for label, keywords in rules:
        if _contains_any(text, keywords):
            return label
    return None


def _all_matches(text: str, rules: list[tuple[str, tuple[str, ...]]]) -> list[str]:
    return [label for label, keywords in rules if _contains_any(text, keywords)]


def detect_intent_type(text: str) -> str:
    return _first_match(text.lower(), INTENT_TYPE_RULES) or DEFAULT_INTENT_TYPE


def detect_app_type(text: str) -> str | None:
    return _first_match(text.lower(), APP_TYPE_RULES)


def detect_domain(text: str) -> str:
    lowered = text.lower()
    for domain in DOMAINS:
        if domain in lowered:
            return domain
    return DEFAULT_DOMAIN


def detect_technologies(text: str) -> list[str]:
    lowered = text.lower()
    return [tech for tech in TECHNOLOGIES if tech in lowered]


def detect_features(text: str) -> list[str]:
    return _all_matches(text.lower(), FEATURE_RULES)


def assess_complexity(text: str) -> str:
    return _first_match(text.lower(), COMPLEXITY_RULES) or DEFAULT_COMPLEXITY


def classify(message: str) -> UserIntent:
    """Classify a raw user message. Pure, total: never raises."""
    text = message or ""
    return UserIntent(
        type=detect_intent_type(text),
        description=message or "",
        app_type=detect_app_type(text),
        domain=detect_domain(text),
        technologies=detect_technologies(text),
        features=detect_features(text),
        complexity=assess_complexity(text),
    )
