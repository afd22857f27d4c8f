"""
Safe words that contain a flexible-match word but should not be flagged.

A flexible match is expanded to the whole run of letters around it; if that
run contains any exception listed for the word, the match is discarded.
"""

from typing import Dict, FrozenSet

FALSE_POSITIVE_EXCEPTIONS: Dict[str, FrozenSet[str]] = {
    "fuck": frozenset(),

    # "shitake" is a common misspelling of the mushroom
    "shit": frozenset({
        "shiitake", "shitake", "shittim", "mishit",
    }),

    "bitch": frozenset(),

    "cock": frozenset({
        "cockpit", "cockatoo", "cockatiel", "peacock", "hancock", "cocktail",
        "cockroach", "shuttlecock", "weathercock", "babcock", "hitchcock",
        "woodcock", "gamecock", "cockerel", "cockney", "cockle", "stopcock",
        "ballcock", "petcock", "cocky", "cockiness", "cockamamie", "cocksure",
        "alcock", "glasscock", "haycock",
    }),
}
