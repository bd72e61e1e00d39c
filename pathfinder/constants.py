## Fixed UI choices and user-facing copy

CAREER_PATHS = [
    {"name": "Full Stack Developer", "icon": "code", "color": "from-sky-500 to-indigo-500"},
    {"name": "AI Engineer", "icon": "cpu", "color": "from-purple-500 to-pink-500"},
    {"name": "Frontend Developer", "icon": "layers", "color": "from-green-400 to-teal-500"},
    {"name": "Backend Developer", "icon": "database", "color": "from-orange-500 to-amber-500"},
    {"name": "Data Analyst", "icon": "bar-chart", "color": "from-red-500 to-rose-500"},
]

CAREER_PATH_NAMES = [p["name"] for p in CAREER_PATHS]

ROADMAP_ERROR_MESSAGE = (
    "Failed to generate roadmap. The AI might be busy, or an API key error occurred. "
    "Please try again later."
)
DELAY_MESSAGE = (
    "Still working... The roadmap is being generated by AI and may take up to a minute. "
    "Please wait!"
)

CHAT_GREETING = (
    "Hello! I'm your technical assistant. I can help you with programming questions, "
    "career guidance, learning resources, and more. What would you like to know?"
)
CHAT_FALLBACK = (
    "Sorry, I encountered an error while processing your question. "
    "Please try again in a moment."
)
CHAT_HISTORY_LIMIT = 10
DEFAULT_CHAT_TOPIC = "software and tech careers"
