"""Integration tests for the import_prediction_jobs management command."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from django.core.management import call_command
from django.core.management.base import CommandError

from core.models import PredictionJob

pytestmark = pytest.mark.integration


def _write_manifest(tmp_path: Path, *documents: dict) -> Path:
    path = tmp_path / "jobs.yaml"
    path.write_text(yaml.safe_dump_all(documents), encoding="utf-8")
    return path


@pytest.mark.django_db
def test_write_upserts_prediction_jobs(tmp_path: Path, make_document) -> None:
    """Manifests are created, then updated in place on re-import."""

    manifest = _write_manifest(
        tmp_path,
        make_document(name="web-cpu"),
        {"apiVersion": "v1", "kind": "ConfigMap", "metadata": {"name": "ignored"}},
    )

    call_command("import_prediction_jobs", str(manifest), "--write")
    job = PredictionJob.objects.get(namespace="default", name="web-cpu")
    assert job.spec["predictionMetrics"][0]["resourceIdentifier"] == "cpu"
    assert PredictionJob.objects.count() == 1

    updated = make_document(name="web-cpu", algorithm_type="percentile", with_dsp=False)
    call_command("import_prediction_jobs", str(_write_manifest(tmp_path, updated)), "--write")
    job.refresh_from_db()
    assert job.spec["predictionMetrics"][0]["algorithm"]["algorithmType"] == "percentile"
    assert PredictionJob.objects.count() == 1


@pytest.mark.django_db
def test_check_does_not_write(tmp_path: Path, make_document, capsys) -> None:
    """Check mode reports what would change without touching the database."""

    manifest = _write_manifest(tmp_path, make_document(name="web-cpu"))

    call_command("import_prediction_jobs", str(manifest), "--check")

    assert PredictionJob.objects.count() == 0
    assert "[CHECK] create default/web-cpu" in capsys.readouterr().out


@pytest.mark.django_db
def test_requires_explicit_mode(tmp_path: Path, make_document) -> None:
    """The command refuses to run without --check or --write, or with both."""

    manifest = _write_manifest(tmp_path, make_document())

    with pytest.raises(CommandError):
        call_command("import_prediction_jobs", str(manifest))
    with pytest.raises(CommandError):
        call_command("import_prediction_jobs", str(manifest), "--check", "--write")


@pytest.mark.django_db
def test_invalid_manifest_is_rejected_without_writes(tmp_path: Path, make_document) -> None:
    """An invalid TimeSeriesPrediction aborts the import before any write."""

    broken = make_document(name="broken")
    broken["spec"]["predictionMetrics"] = "cpu"
    manifest = _write_manifest(tmp_path, make_document(name="web-cpu"), broken)

    with pytest.raises(CommandError, match="Document 1"):
        call_command("import_prediction_jobs", str(manifest), "--write")
    assert PredictionJob.objects.count() == 0
