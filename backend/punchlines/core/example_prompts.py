"""
Example joke setups shown on the prompt page
"""
import random
from typing import List, Optional

EXAMPLES = [
    "A hacker has published Kim Kardashian's financial information online.",
    "A gambler won 14 million dollars on last night’s World Series game.",
    "The founder of IKEA has stepped down.",
    "A new high school in Chicago will be named after President Obama.",
    "The other day in Nevada, a woman ran into a Subway restaurant and gave birth.",
    "According to a new study, talking after having sex just as important as sex.",
    "Facebook announced major changes to its privacy settings.",
    "An exact replica of the Titanic is scheduled to set sail in 2018.",
    "Legendary astronaut Buzz Aldrin is now single.",
    "Safety experts now say more and more car crashes are being caused by GPS devices.",
    "Netflix is testing a new feature that will allow you to hide what you’ve been watching.",
    "A new survey shows two-thirds of American adults pee in the ocean.",
]

DEFAULT_EXAMPLE_COUNT = 4


def pick_examples(count: int = DEFAULT_EXAMPLE_COUNT, rng: Optional[random.Random] = None) -> List[str]:
    """A shuffled selection of distinct example setups"""
    rng = rng or random
    count = max(0, min(count, len(EXAMPLES)))
    return rng.sample(EXAMPLES, count)
