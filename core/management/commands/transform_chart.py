"""Run the chart transform over a JSON payload file and print the ViewModel."""

from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder

from core.payload_codec import PayloadError, decode_chart_settings, decode_data_source, encode_view_model
from core.services import run_transform


class Command(BaseCommand):
    """Transform a saved `{source, settings}` payload into a chart spec."""

    help = "Validate a JSON payload for its chart type and print the resulting ViewModel as JSON."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("payload", help="Path to a JSON file with `source` and `settings` sections.")
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Exit with an error when the data shape is rejected for the chart type.",
        )
        parser.add_argument(
            "--indent",
            type=int,
            default=2,
            help="JSON indentation for the printed ViewModel.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        path = Path(options["payload"])
        strict: bool = options["strict"]
        indent: int = options["indent"]

        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CommandError(f"Could not read payload file: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CommandError(f"Payload is not valid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise CommandError("Payload must be a JSON object.")
        try:
            source = decode_data_source(payload.get("source") or {})
            chart_settings = decode_chart_settings(payload.get("settings"))
        except PayloadError as exc:
            raise CommandError(str(exc)) from exc

        view_model = run_transform(source, chart_settings)
        if strict and not view_model.test_result.result:
            raise CommandError("\n".join(view_model.test_result.messages))

        self.stdout.write(json.dumps(encode_view_model(view_model), cls=DjangoJSONEncoder, indent=indent))
        return None
