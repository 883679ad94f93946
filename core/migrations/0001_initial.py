from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PredictionJob",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("namespace", models.CharField(max_length=253)),
                ("name", models.CharField(max_length=253)),
                ("spec", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Prediction Job",
                "verbose_name_plural": "Prediction Jobs",
                "ordering": ["namespace", "name"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("namespace", "name"), name="uniq_prediction_job_namespace_name"
                    )
                ],
            },
        ),
    ]
