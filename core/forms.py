"""Forms backing the chart property pane.

The pane only shows what applies to the current selection: the title text
is hidden until "show title" is set, axis labels are hidden for Pie charts,
and option fields are limited to the chart type's allow-list. Numeric option
fields advertise their valid ranges through `min_value` / `max_value`.
"""

from __future__ import annotations

from django import forms

from chartspec.enums import ChartType, LegendPosition
from chartspec.options import option_fields_for
from chartspec.settings import OPTION_RANGES, ChartOptionSettings, CoreParameterSettings


def _bound_or_initial(form: forms.Form, name: str, default: object = None) -> object:
    """Return the submitted value for `name`, falling back to the form's initial data."""

    if form.is_bound and name in form.data:
        return form.data.get(name)
    return form.initial.get(name, default)


def _truthy(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().casefold() in {"1", "true", "on", "yes"}


class CoreParametersForm(forms.Form):
    """Edit the core chart parameters (type, title, axis labels)."""

    chart_type = forms.ChoiceField(
        required=True,
        choices=[(chart_type.value, chart_type.value) for chart_type in ChartType],
        label="Chart type",
    )
    show_title = forms.BooleanField(required=False, label="Show title")
    title_text = forms.CharField(required=False, max_length=200, label="Title text")
    x_label = forms.CharField(required=False, max_length=200, label="X-axis label")
    y_label = forms.CharField(required=False, max_length=200, label="Y-axis label")

    def __init__(self, *args, **kwargs) -> None:
        """Drop fields that do not apply to the current selection."""

        super().__init__(*args, **kwargs)

        if not _truthy(_bound_or_initial(self, "show_title", False)):
            del self.fields["title_text"]
        if _bound_or_initial(self, "chart_type", ChartType.Bar.value) == ChartType.Pie.value:
            del self.fields["x_label"]
            del self.fields["y_label"]

    def settings(self) -> CoreParameterSettings:
        """Return typed core parameters from validated form values.

        Raises:
            ValueError: If the form is invalid.
        """

        if not self.is_valid():
            raise ValueError("CoreParametersForm must be valid before building settings.")

        cleaned = self.cleaned_data
        return CoreParameterSettings(
            chart_type=str(cleaned["chart_type"]),
            show_title=bool(cleaned.get("show_title")),
            title_text=cleaned.get("title_text") or None,
            x_label=cleaned.get("x_label") or None,
            y_label=cleaned.get("y_label") or None,
        )


class ChartOptionsForm(forms.Form):
    """Edit chart options for one chart type.

    Leaving a field empty means "unset"; the default table fills it in at
    transform time. Zero is kept as an explicit choice.
    """

    x_tick_count = forms.IntegerField(
        required=False,
        min_value=OPTION_RANGES["x_tick_count"].min,
        max_value=OPTION_RANGES["x_tick_count"].max,
        label="X-axis ticks",
    )
    y_tick_count = forms.IntegerField(
        required=False,
        min_value=OPTION_RANGES["y_tick_count"].min,
        max_value=OPTION_RANGES["y_tick_count"].max,
        label="Y-axis ticks",
    )
    legend_position = forms.TypedChoiceField(
        required=False,
        coerce=int,
        empty_value=None,
        choices=[("", "Default")]
        + [(position.value, position.name.replace("_", " ").title()) for position in LegendPosition],
        label="Legend position",
    )
    show_line = forms.BooleanField(required=False, label="Show line")
    dot_size = forms.FloatField(
        required=False,
        min_value=OPTION_RANGES["dot_size"].min,
        max_value=OPTION_RANGES["dot_size"].max,
        label="Dot size",
    )
    time_format = forms.CharField(
        required=False,
        max_length=50,
        label="Time format",
        help_text="Tick format for date axes, e.g. MM/DD.",
    )
    inner_padding = forms.IntegerField(
        required=False,
        min_value=OPTION_RANGES["inner_padding"].min,
        max_value=OPTION_RANGES["inner_padding"].max,
        label="Inner radius (%)",
    )

    def __init__(self, *args, chart_type: ChartType, category_is_date: bool = False, **kwargs) -> None:
        """Keep only the option fields allowed for `chart_type`."""

        super().__init__(*args, **kwargs)
        self.chart_type = chart_type
        allowed = set(option_fields_for(chart_type, category_is_date=category_is_date))
        for name in list(self.fields):
            if name not in allowed:
                del self.fields[name]

    def settings(self) -> ChartOptionSettings:
        """Return typed option overrides from validated form values.

        Raises:
            ValueError: If the form is invalid.
        """

        if not self.is_valid():
            raise ValueError("ChartOptionsForm must be valid before building settings.")

        values = {
            name: (None if value == "" else value)
            for name, value in self.cleaned_data.items()
        }
        return ChartOptionSettings(**values)
