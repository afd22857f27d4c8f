"""
Built-in profanity word tiers and their replacements.

Tiers are cumulative: every MILD word is also a MODERATE word, every
MODERATE word is also a STRICT word. Each canonical word maps to a soft
replacement shown in place of the original.
"""

from typing import Dict, FrozenSet

# Typographic apostrophe, common in retail subtitle files
_RSQUO = "\u2019"

# MILD: only the worst of the worst
MILD_WORDS: FrozenSet[str] = frozenset({
    "fuck", "fucking", "fucked", "fucker", "fuckers", "fucks",
    "fuckin'", f"fuckin{_RSQUO}",
    "motherfuck", "motherfucker", "motherfuckers", "motherfucking",
    "bitch", "bitches", "bitching", "bitchin'", f"bitchin{_RSQUO}",
    "ass", "asses", "asshole", "assholes",
    "arse", "arses", "arsehole", "arseholes",
})

# MODERATE: adds lesser profanity and crude anatomy
MODERATE_WORDS: FrozenSet[str] = MILD_WORDS | frozenset({
    "shit", "shits", "shitting", "shitter", "shite", "shitty", "shittier",
    "bullshit", "dipshit", "dipshits",
    "cunt", "cunts", "pussy", "pussies",
    "cock", "cocks", "cocksucker", "cocksuckers",
    "dick", "dicks", "dickhead", "dickheads",
    "whore", "whores", "slut", "sluts", "bastard", "bastards",
    "piss", "pissed", "pissing", "damn", "damned",
})

# STRICT: adds religious exclamations, slurs and casual profanity
STRICT_WORDS: FrozenSet[str] = MODERATE_WORDS | frozenset({
    "god", "gods", "hell", "hells", "goddamn", "goddam", "goddammit",
    "god damn", "god dammit", "oh my god", "omg",
    "jesus", "christ", "lord", "jesus christ", "holy shit",
    "fag", "fagot", "faggot",
    "retard", "retards", "gay", "homo", "queer", "lesbian", "tranny",
    "nigga", "nigger", "son of a bitch", "spic", "chink", "wetback",
})

REPLACEMENTS: Dict[str, str] = {
    # MILD
    "fuck": "frick", "fucking": "freaking", "fucked": "messed up", "fucker": "jerk",
    "fuckers": "jerks", "fucks": "messes up",
    "fuckin'": "freakin'", f"fuckin{_RSQUO}": f"freakin{_RSQUO}",
    "motherfuck": "jerk", "motherfucker": "jerk", "motherfuckers": "jerks",
    "motherfucking": "freaking",
    "bitch": "jerk", "bitches": "jerks", "bitching": "complaining",
    "bitchin'": "complainin'", f"bitchin{_RSQUO}": f"complainin{_RSQUO}",
    "ass": "butt", "asses": "butts", "asshole": "jerk", "assholes": "jerks",
    "arse": "butt", "arses": "butts", "arsehole": "jerk", "arseholes": "jerks",

    # MODERATE
    "shit": "shoot", "shits": "shoots", "shitting": "shooting", "shitter": "shooter",
    "shite": "shoot", "shitty": "awful", "shittier": "worse", "bullshit": "nonsense",
    "dipshit": "silly person", "dipshits": "silly people",
    "cunt": "person", "cunts": "people", "pussy": "cat", "pussies": "cats",
    "cock": "rooster", "cocks": "roosters", "cocksucker": "jerk", "cocksuckers": "jerks",
    "dick": "jerk", "dicks": "jerks", "dickhead": "jerk", "dickheads": "jerks",
    "whore": "mean person", "whores": "mean people",
    "slut": "mean person", "sluts": "mean people",
    "bastard": "jerk", "bastards": "jerks",
    "piss": "ticked", "pissed": "ticked off", "pissing": "getting ticked",
    "damn": "darn", "damned": "darned",

    # STRICT
    "god": "gosh", "gods": "goshes", "hell": "heck", "hells": "hecks",
    "goddamn": "gosh darn", "goddam": "gosh darn", "goddammit": "gosh darnit",
    "god damn": "gosh darn", "god dammit": "gosh darnit", "oh my god": "oh my gosh",
    "omg": "omg", "jesus": "jeepers", "christ": "crikey", "lord": "goodness",
    "jesus christ": "jeepers crikey", "holy shit": "holy shoot",
    "fag": "person", "fagot": "person", "faggot": "person",
    "retard": "silly person", "retards": "silly people", "gay": "happy",
    "homo": "person", "queer": "strange", "lesbian": "person", "tranny": "person",
    "nigga": "person", "nigger": "person", "son of a bitch": "mean person",
    "spic": "person", "chink": "person", "wetback": "person",
}

# Matched as raw substrings (no word boundary) so inflections and
# compounds like "fuckface" or "shitshow" are still caught.
# TODO: switch "cock" to boundary matching plus explicit compounds; its
# exception list has to grow with every new surname or bird name.
FLEXIBLE_WORDS: FrozenSet[str] = frozenset({
    "fuck", "shit", "bitch", "cock",
})

# Replacement for user-defined custom words
DEFAULT_PLACEHOLDER = "[filtered]"
