from __future__ import annotations

from django.db import models

from .puzzles.normalize import normalize_text


# PUBLIC_INTERFACE
class TimeStampedModel(models.Model):
    """Abstract base model providing created/updated timestamps.

    Notes:
        Keep this abstract model free of any logic that would access the Django
        app registry or execute queries at module import time. Only field
        declarations and Meta options are allowed here so that importing this
        module does not trigger AppRegistryNotReady during Django startup.
    """
    created_at = models.DateTimeField(auto_now_add=True, help_text="Time when the record was created.")
    updated_at = models.DateTimeField(auto_now=True, help_text="Time when the record was last updated.")

    class Meta:
        abstract = True


class WordQuerySet(models.QuerySet):
    def accepts(self, text: str) -> bool:
        """True if ``text`` is an active dictionary word."""
        word = normalize_text(text)
        return bool(word) and self.filter(text=word, is_active=True).exists()


# PUBLIC_INTERFACE
# Note: Do not perform any queries or app lookups at module scope. Model fields
# and Meta are safe; any dynamic logic should live in methods or AppConfig.ready().
class Word(TimeStampedModel):
    """A dictionary word accepted as a rung in word-chain puzzles.

    Fields:
    - text: unique lowercased word text
    - length: derived length for quick filtering
    - is_active: whether the word is currently accepted
    """
    text = models.CharField(max_length=32, unique=True, db_index=True, help_text="Lowercase word text.")
    length = models.PositiveSmallIntegerField(db_index=True, help_text="Length of the word.")
    is_active = models.BooleanField(default=True, help_text="If false, the word is no longer accepted.")

    objects = WordQuerySet.as_manager()

    class Meta:
        ordering = ["length", "text"]
        verbose_name = "Word"
        verbose_name_plural = "Words"

    def save(self, *args, **kwargs):
        # Normalize text, derive length on save
        if self.text:
            self.text = normalize_text(self.text)
            self.length = len(self.text)
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return self.text
