"""Import TimeSeriesPrediction manifests into the prediction job store."""

from __future__ import annotations

from pathlib import Path

import yaml
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from analysis.prediction import InvalidResourceError, TimeSeriesPrediction
from core.models import PredictionJob

MANIFEST_KIND = "TimeSeriesPrediction"


class Command(BaseCommand):
    """Upsert TimeSeriesPrediction resources from a YAML manifest file."""

    help = "Import TimeSeriesPrediction manifests (multi-document YAML) into the job store (idempotent)."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("manifest", type=Path, help="Path to a YAML manifest file.")
        parser.add_argument(
            "--check",
            action="store_true",
            help="Dry-run: validate manifests and report what would change without writing.",
        )
        parser.add_argument(
            "--write",
            action="store_true",
            help="Write changes to the database.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        manifest: Path = options["manifest"]
        check: bool = options["check"]
        write: bool = options["write"]

        if check and write:
            raise CommandError("Use either --check or --write, not both.")
        if not check and not write:
            raise CommandError("Refusing to write without explicit intent; pass --check or --write.")

        try:
            documents = list(yaml.safe_load_all(manifest.read_text(encoding="utf-8")))
        except OSError as exc:
            raise CommandError(f"Cannot read {manifest}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise CommandError(f"Invalid YAML in {manifest}: {exc}") from exc

        jobs: list[tuple[TimeSeriesPrediction, dict]] = []
        skipped = 0
        for index, document in enumerate(documents):
            if not isinstance(document, dict) or document.get("kind") != MANIFEST_KIND:
                skipped += 1
                continue
            try:
                job = TimeSeriesPrediction.from_dict(document)
            except InvalidResourceError as exc:
                raise CommandError(f"Document {index} is not a valid {MANIFEST_KIND}: {exc}") from exc
            jobs.append((job, document.get("spec") or {}))

        totals = {"documents": len(documents), "skipped": skipped, "created": 0, "updated": 0}
        mode = "CHECK" if check else "WRITE"
        with transaction.atomic():
            for job, spec in jobs:
                exists = PredictionJob.objects.filter(namespace=job.namespace, name=job.name).exists()
                totals["updated" if exists else "created"] += 1
                if write:
                    PredictionJob.objects.update_or_create(
                        namespace=job.namespace,
                        name=job.name,
                        defaults={"spec": spec},
                    )
                self.stdout.write(f"[{mode}] {'update' if exists else 'create'} {job.namespace}/{job.name}")

        self.stdout.write(f"[{mode}] totals={totals}")
        return None
