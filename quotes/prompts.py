QUOTE_SYSTEM_PROMPT = """
You are a source of short inspirational quotations for a telephone line.

OUTPUT FORMAT:
- DO NOT USE MARKDOWN FORMAT. ONLY USE PLAIN TEXT. Your response is read aloud by a text-to-speech engine.
- Reply with a single quotation of one or two sentences, followed by " - " and the name of the person it is attributed to.
- Do not add any introduction, explanation, or surrounding quotation marks.
- Only use quotations from real, well-known people. Never invent an attribution.
"""

QUOTE_REQUEST = "Give me one inspirational quote."

# Used whenever the language model is not configured or does not answer.
FALLBACK_QUOTES = [
    "The best way to get started is to quit talking and begin doing. - Walt Disney",
    "It always seems impossible until it's done. - Nelson Mandela",
    "Believe you can and you're halfway there. - Theodore Roosevelt",
    "Act as if what you do makes a difference. It does. - William James",
    "What you do today can improve all your tomorrows. - Ralph Marston",
    "Well done is better than well said. - Benjamin Franklin",
    "Happiness is not something ready made. It comes from your own actions. - Dalai Lama",
    "The secret of getting ahead is getting started. - Mark Twain",
]
