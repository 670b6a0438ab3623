from django.core.management.base import BaseCommand

from api.models import Word
from api.seed_utils import ensure_seed_words


class Command(BaseCommand):
    help = "Seed a minimal word-chain dictionary if the Words table is empty."

    def add_arguments(self, parser):
        parser.add_argument(
            "--file",
            dest="path",
            help="Optional newline-separated word list to seed instead of the built-in one.",
        )

    def handle(self, *args, **options):
        # PUBLIC_INTERFACE
        # This command is idempotent and safe to run multiple times.
        count_before = Word.objects.count()
        if count_before > 0:
            self.stdout.write(self.style.WARNING(f"Words already present: {count_before}. No action taken."))
            return

        words = None
        if options.get("path"):
            with open(options["path"], encoding="utf-8") as handle:
                words = [line.strip() for line in handle if line.strip() and not line.startswith("#")]

        inserted = ensure_seed_words(words)
        self.stdout.write(self.style.SUCCESS(f"Seeded {inserted} words."))
