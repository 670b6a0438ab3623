from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Word",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, help_text="Time when the record was created.")),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="Time when the record was last updated.")),
                ("text", models.CharField(db_index=True, help_text="Lowercase word text.", max_length=32, unique=True)),
                ("length", models.PositiveSmallIntegerField(db_index=True, help_text="Length of the word.")),
                ("is_active", models.BooleanField(default=True, help_text="If false, the word is no longer accepted.")),
            ],
            options={
                "verbose_name": "Word",
                "verbose_name_plural": "Words",
                "ordering": ["length", "text"],
            },
        ),
    ]
