from typing import List, Optional

from django.db import transaction

from .models import Word

# Ladder-friendly words: most of them are one letter away from another entry.
DEFAULT_SEED: List[str] = [
    "bold", "bolt", "boat", "coat", "cost", "most", "mist", "fist",
    "cold", "cord", "card", "ward", "warm", "worm", "word", "wore",
    "core", "care", "bare", "bore", "head", "heal", "teal", "tell",
    "tall", "tail", "hate", "have", "gave", "give", "live", "love",
    "lose", "lost", "list", "lint", "mint", "mine", "wine", "wise",
    "crane", "crate", "grate", "grape", "drape", "drake", "brake", "brave",
]


# PUBLIC_INTERFACE
def ensure_seed_words(seed_words: Optional[List[str]] = None) -> int:
    """Ensure the Word table holds at least a minimal dictionary.

    Returns number of words inserted (0 if already present).
    """
    if Word.objects.exists():
        return 0
    words = sorted({w.strip().lower() for w in (seed_words or DEFAULT_SEED) if w.strip()})
    with transaction.atomic():
        Word.objects.bulk_create([Word(text=w, length=len(w), is_active=True) for w in words], ignore_conflicts=True)
    return len(words)
