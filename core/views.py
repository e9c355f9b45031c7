"""JSON endpoints exposing the chart transform to the host."""

from __future__ import annotations

import json
import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from chartspec.engine import parse_chart_type
from chartspec.options import OPTION_KEYS, advertised_ranges, option_fields_for
from core.localization import render_messages
from core.payload_codec import PayloadError, decode_chart_settings, decode_data_source, encode_view_model
from core.services import chart_option_defaults, run_transform

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def transform_api(request: HttpRequest) -> JsonResponse:
    """Transform a posted data source + settings payload into a ViewModel.

    The request body is a JSON object with `source` and `settings` sections.
    Validation failures are part of the normal response (`test_result`);
    only malformed payloads produce HTTP 400.
    """

    try:
        payload = json.loads(request.body or b"{}")
        if not isinstance(payload, dict):
            raise PayloadError("Request body must be a JSON object.")
        source = decode_data_source(payload.get("source") or {})
        chart_settings = decode_chart_settings(payload.get("settings"))
    except (json.JSONDecodeError, UnicodeDecodeError, PayloadError) as exc:
        logger.info("Rejected transform payload: %s", exc)
        return JsonResponse({"ok": False, "error": str(exc)}, status=400)

    view_model = run_transform(source, chart_settings)
    body = encode_view_model(view_model)
    body["ok"] = True
    body["messages_html"] = render_messages(view_model.test_result.messages)
    return JsonResponse(body)


@require_GET
def options_api(request: HttpRequest) -> JsonResponse:
    """Describe the option fields, ranges and defaults for a chart type."""

    chart_type = parse_chart_type((request.GET.get("chart_type") or "").strip())
    if chart_type is None:
        return JsonResponse({"ok": False, "error": "Unknown chart_type."}, status=400)
    category_is_date = (request.GET.get("category_is_date") or "").strip().casefold() in {"1", "true", "yes", "on"}

    defaults = chart_option_defaults()
    fields = option_fields_for(chart_type, category_is_date=category_is_date)
    ranges = advertised_ranges(chart_type, category_is_date=category_is_date)
    return JsonResponse(
        {
            "ok": True,
            "chart_type": str(chart_type),
            "fields": [
                {
                    "name": name,
                    "option_key": OPTION_KEYS[name],
                    "default": getattr(defaults, name),
                    "range": (
                        {"min": ranges[name].min, "max": ranges[name].max} if name in ranges else None
                    ),
                }
                for name in fields
            ],
        }
    )
