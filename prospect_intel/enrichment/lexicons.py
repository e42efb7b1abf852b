"""Keyword tables for the enrichment analyzers.

Data only. All matching is case-insensitive on word boundaries after accent
folding, so entries are lowercase ASCII.
"""

# ----------------------------------------------------------------------
# General enrichment
# ----------------------------------------------------------------------

TOPIC_KEYWORDS: dict[str, tuple[str, ...]] = {
    "technology": ("tech", "software", "ai", "data", "cloud", "digital", "innovation", "app", "platform"),
    "business": ("business", "startup", "entrepreneur", "company", "revenue", "growth", "market", "sales"),
    "marketing": ("marketing", "brand", "campaign", "content", "social media", "seo", "advertising"),
    "finance": ("finance", "investment", "funding", "capital", "investor", "money", "budget", "financial"),
    "leadership": ("leadership", "management", "team", "culture", "vision", "strategy", "executive"),
    "healthcare": ("health", "medical", "wellness", "patient", "clinic", "hospital", "healthcare"),
    "education": ("education", "learning", "training", "teaching", "student", "course", "university"),
    "ecommerce": ("ecommerce", "online store", "shop", "retail", "product", "shipping", "checkout"),
}
TOPIC_MIN_HITS = 2

INTEREST_KEYWORDS: dict[str, tuple[str, ...]] = {
    "artificial intelligence": ("ai", "machine learning", "neural network", "deep learning", "automation"),
    "social media": ("facebook", "instagram", "twitter", "linkedin", "tiktok", "social"),
    "entrepreneurship": ("startup", "founder", "entrepreneur", "business owner", "venture"),
    "digital marketing": ("seo", "sem", "content marketing", "email marketing", "ads", "campaign"),
    "sales": ("sales", "selling", "prospect", "pipeline", "deal", "close", "negotiation"),
    "productivity": ("productivity", "efficiency", "workflow", "automation", "time management"),
    "real estate": ("real estate", "property", "house", "apartment", "realtor", "listing"),
    "fitness": ("fitness", "gym", "workout", "exercise", "health", "training"),
}
INTEREST_MIN_HITS = 1

BUYING_SIGNALS: tuple[str, ...] = (
    "looking for",
    "need help with",
    "interested in",
    "considering",
    "evaluating",
    "budget for",
    "planning to",
    "searching for",
    "in the market for",
    "recommendations for",
    "best solution",
    "switching from",
    "upgrade",
    "improve",
    "struggling with",
    "challenge",
    "problem",
)

POSITIVE_WORDS: tuple[str, ...] = (
    "excited", "amazing", "great", "excellent", "wonderful", "fantastic", "love",
    "happy", "successful", "achieved", "proud", "thrilled", "delighted",
)

NEGATIVE_WORDS: tuple[str, ...] = (
    "disappointed", "frustrated", "problem", "issue", "difficult", "struggle",
    "failed", "bad", "terrible", "awful", "hate", "angry", "upset",
)

KEYWORD_STOPWORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
        "with", "is", "was", "are", "been", "be", "have", "has", "had", "do", "does",
        "did", "will", "would", "could", "should", "this", "that", "from", "your",
        "they", "them", "their", "what", "when", "there", "here", "just", "about",
        "mutual", "friends", "friend", "comments", "comment", "reactions", "shares",
    }
)
KEYWORD_MIN_LENGTH = 4
KEYWORD_TOP_N = 10

ORGANIZATION_SUFFIXES: tuple[str, ...] = (
    "Inc", "Corp", "LLC", "Ltd", "Company", "Group", "Technologies", "Solutions",
)

KNOWN_LOCATIONS: tuple[str, ...] = (
    "New York", "San Francisco", "Los Angeles", "Chicago", "Boston", "Seattle",
    "Austin", "Miami", "Manila", "Metro Manila", "Quezon City", "Makati", "Taguig",
    "Pasig", "Cebu", "Davao", "Iloilo", "Baguio", "Singapore", "Tokyo", "London",
    "Paris", "Dubai", "Hong Kong", "Sydney",
)

INDUSTRY_SIGNALS: dict[str, tuple[str, ...]] = {
    "SaaS": ("saas", "software as a service"),
    "B2B": ("b2b", "business to business"),
    "B2C": ("b2c", "business to consumer"),
    "FinTech": ("fintech", "financial technology"),
    "EdTech": ("edtech", "education technology"),
    "HealthTech": ("healthtech", "health technology"),
}

# ----------------------------------------------------------------------
# Taglish / Filipino analysis
# ----------------------------------------------------------------------

FILIPINO_KEYWORDS: dict[str, tuple[str, ...]] = {
    "business": (
        "negosyo", "sideline", "sidebiz", "kita", "kumita", "kikita",
        "kikitain", "kitain", "benta", "bentahan", "tinda", "tindahan",
        "puhunan", "capital", "invest", "investor", "business",
        "partner", "kasosyo", "kapareha", "kumpanya", "opisina",
        "suweldo", "sahod", "bayad", "presyo", "halaga",
        "diskwento", "sale", "promo", "libre", "free",
        "networking", "mlm", "direct selling", "online selling",
        "reseller", "supplier", "distributor", "dealer",
        "pera", "yaman", "milyonaryo", "milyon", "libo",
        "income", "profit", "tubo", "balik",
        "franchise", "branch", "sangay", "open na", "grand opening",
    ),
    "lifestyle": (
        "bahay", "condo", "lupa", "ari-arian", "property",
        "kotse", "sasakyan", "motor", "travel", "lakad",
        "gala", "vacation", "pasyal", "shopping", "bili",
        "mamili", "mall", "foods", "kain", "kumain",
        "inom", "inuman", "party", "celebrate", "saya",
        "salo-salo", "samahan", "barkada", "tropa", "kaibigan",
        "pamilya", "family", "anak", "asawa", "misis", "mister",
        "lovelife", "jowa", "syota", "boyfriend", "girlfriend",
        "wedding", "kasal", "debut", "birthday", "kaarawan",
    ),
    "emotions": (
        "masaya", "happy", "blessed", "grateful",
        "salamat", "thank you", "thanks", "appreciated",
        "malungkot", "sad", "down", "lungkot", "iyak",
        "galit", "inis", "badtrip", "nakakainis", "nakakagalit",
        "excited", "sabik", "motivated", "inspired",
        "pagod", "tired", "stressed", "burnout", "hirap",
        "takot", "kaba", "nervous", "worried", "alala",
        "proud", "ipagmalaki", "achievement", "success", "tagumpay",
        "love", "mahal", "pag-ibig", "care", "malasakit",
    ),
    "locations": (
        "manila", "quezon city", "makati", "taguig", "bgc",
        "ortigas", "pasig", "mandaluyong", "pasay", "paranaque",
        "las pinas", "muntinlupa", "alabang", "cavite", "laguna",
        "bulacan", "pampanga", "batangas", "rizal", "antipolo",
        "cebu", "davao", "iloilo", "bacolod", "baguio",
        "tagaytay", "boracay", "palawan", "siargao", "bohol",
        "metro manila", "ncr", "luzon", "visayas", "mindanao",
    ),
    "relationships": (
        "kapatid", "kuya", "ate", "bunso", "panganay",
        "magulang", "nanay", "tatay", "mama", "papa",
        "lolo", "lola", "apo", "pamangkin", "pinsan",
        "tito", "tita", "ninong", "ninang", "inaanak",
        "kapitbahay", "kaklase", "kabatch", "schoolmate",
        "officemate", "workmate", "kasama", "ka-team",
    ),
}

FILIPINO_BUYING_INTENT_PHRASES: tuple[str, ...] = (
    "gusto ko bumili", "bibili ako", "paano mag-order",
    "magkano", "how much", "presyo", "may available",
    "meron ba", "pwede ba", "interested ako",
    "gusto ko", "saan makakabili", "paano makakuha",
    "looking for", "hanap", "hinahanap", "need ko",
    "kailangan ko", "bibili na", "order na",
    "saan pwede", "may alam ba kayo", "may kilala",
    "recommend", "paki-recommend", "suggest naman",
)

CULTURAL_SIGNALS: tuple[str, ...] = (
    "po", "opo", "ho", "oho",
    "kasi", "kase", "eh", "diba", "di ba",
    "naman", "nga", "lang", "pa", "na",
    "talaga", "totoo", "oo",
    "hindi", "ayaw", "wag",
    "sige", "tara", "sama", "halika",
    "kumusta", "kamusta", "musta",
)

FILIPINO_PERCENT_MULTIPLIER = 3
LANGUAGE_WORD_MIN_LENGTH = 3
TAGLISH_RANGE = (20, 80)

BUSINESS_HUBS: frozenset[str] = frozenset(
    {"manila", "makati", "bgc", "ortigas", "cebu", "davao"}
)

LOCALIZED_GREETINGS: dict[str, tuple[str, str, str]] = {
    "pure_filipino": (
        "Kumusta po!",
        "formal_respectful",
        "Use Filipino language with respectful tone (po/ho)",
    ),
    "taglish": ("Hi! Kumusta?", "casual_friendly", "Mix Filipino and English naturally"),
    "pure_english": ("Hi there!", "professional", "Use English with professional tone"),
    "mixed": ("Hello!", "neutral", "Adapt based on response"),
}

# ----------------------------------------------------------------------
# Personality profiling
# ----------------------------------------------------------------------

FORMAL_VOCABULARY: tuple[str, ...] = (
    "please", "kindly", "regards", "sincerely", "thank you", "appreciate",
    "respectfully", "dear", "po", "opo", "sir", "madam", "ma'am",
    "furthermore", "therefore", "pleased", "grateful for",
)

CASUAL_VOCABULARY: tuple[str, ...] = (
    "hey", "lol", "haha", "hehe", "omg", "guys", "dude", "bro", "sis", "besh",
    "pare", "tara", "grabe", "gonna", "wanna", "btw", "yung", "charot", "sana all",
)

FORMAL_DOMINANCE_RATIO = 1.5

ENGAGEMENT_THRESHOLDS: tuple[tuple[int, str], ...] = ((10, "high"), (5, "medium"))

DECISION_MAKER_SIGNALS: tuple[str, ...] = (
    "ceo", "founder", "co-founder", "owner", "business owner", "president",
    "director", "managing director", "head of", "vice president", "vp",
    "manager", "partner", "proprietor", "decision maker", "in charge of",
    "approve", "budget", "we are hiring", "hiring",
)

INFLUENCER_SIGNALS: tuple[str, ...] = (
    "followers", "subscribers", "influencer", "content creator", "blogger",
    "vlogger", "speaker", "coach", "mentor", "community", "ambassador",
    "podcast", "featured", "trending", "viral", "live now",
)

TRAIT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "ambitious": ("goal", "goals", "achieve", "success", "dream", "pangarap", "hustle", "grind", "target", "level up"),
    "family-oriented": ("family", "pamilya", "anak", "kids", "asawa", "wife", "husband", "mom", "dad", "nanay", "tatay"),
    "faith-driven": ("god", "lord", "blessed", "pray", "prayer", "diyos", "church", "faith", "grateful"),
    "analytical": ("data", "research", "analyze", "analysis", "study", "details", "plan", "strategy", "compare", "numbers"),
    "sociable": ("friends", "barkada", "tropa", "party", "together", "community", "meet", "kaibigan", "celebrate"),
    "adventurous": ("travel", "adventure", "explore", "trip", "beach", "gala", "hike", "vacation", "roadtrip"),
    "health-conscious": ("fitness", "gym", "workout", "healthy", "wellness", "diet", "run", "exercise"),
    "entrepreneurial": ("business", "negosyo", "startup", "sideline", "sales", "clients", "customers", "invest", "franchise", "online selling"),
}
TRAIT_MIN_HITS = 2
TRAIT_MAX = 5

PERSONALITY_TYPE_INDICATORS: dict[str, tuple[str, ...]] = {
    "Connector": ("friends", "people", "together", "tayo", "team", "share", "help"),
    "Driver": ("goal", "achieve", "win", "results", "success", "target", "kaya"),
    "Analyzer": ("think", "analyze", "data", "study", "research", "details", "plan"),
    "Dreamer": ("dream", "vision", "imagine", "future", "pangarap", "someday"),
    "Helper": ("help", "serve", "care", "family", "others", "tulong", "awa"),
}
DEFAULT_PERSONALITY_TYPE = "Connector"

# ----------------------------------------------------------------------
# Pain points
# ----------------------------------------------------------------------

PAIN_CATEGORIES: dict[str, tuple[str, tuple[str, ...], str]] = {
    # category: (default severity, keywords, description)
    "time_management": (
        "high",
        ("no time", "too busy", "overwhelmed", "behind schedule", "deadline", "time-consuming", "slow process", "taking forever"),
        "Struggling with time management and meeting deadlines",
    ),
    "cost_efficiency": (
        "high",
        ("expensive", "costly", "budget", "afford", "pricing", "too much money", "waste", "roi"),
        "Looking for more cost-effective solutions",
    ),
    "productivity": (
        "medium",
        ("inefficient", "manual", "tedious", "repetitive", "bottleneck", "slow down", "productivity"),
        "Seeking ways to improve efficiency and productivity",
    ),
    "technology": (
        "medium",
        ("outdated", "legacy", "technical issue", "bug", "broken", "not working", "integration", "compatibility"),
        "Experiencing technical challenges or outdated systems",
    ),
    "growth": (
        "high",
        ("stagnant", "not growing", "plateau", "scale", "expansion", "limited", "capacity"),
        "Facing growth and scaling challenges",
    ),
    "customer_acquisition": (
        "high",
        ("lead generation", "finding customers", "no sales", "conversion", "traffic", "visibility", "reach"),
        "Need help with lead generation and customer acquisition",
    ),
    "team_collaboration": (
        "medium",
        ("miscommunication", "silos", "coordination", "remote work", "alignment", "team issues"),
        "Dealing with team coordination and communication issues",
    ),
    "data_management": (
        "medium",
        ("data loss", "organization", "tracking", "reporting", "analytics", "insights", "metrics"),
        "Struggling with data organization and insights",
    ),
    "customer_retention": (
        "high",
        ("churn", "losing customers", "retention", "satisfaction", "complaints", "support"),
        "Concerned about customer satisfaction and retention",
    ),
    "competition": (
        "high",
        ("competitor", "losing market share", "differentiation", "competitive advantage", "falling behind"),
        "Facing competitive pressure in the market",
    ),
}

URGENCY_INDICATORS: tuple[str, ...] = (
    "urgent", "asap", "immediately", "critical", "emergency", "now",
    "must", "need to", "have to", "deadline", "running out",
)
FRUSTRATION_INDICATORS: tuple[str, ...] = (
    "frustrated", "annoying", "terrible", "awful", "hate", "sick of",
    "tired of", "disappointed", "struggling", "difficult", "hard",
)
URGENCY_POINTS = 10
FRUSTRATION_POINTS = 5

OUTREACH_STRATEGIES: dict[str, tuple[str, str]] = {
    "hot": ("Direct solution-focused outreach", "Reach out immediately"),
    "warm": ("Educational content with soft pitch", "Reach out within 24-48 hours"),
    "cold": ("Value-first relationship building", "Nurture with content over 1-2 weeks"),
}
OUTREACH_TALKING_POINTS = 3
