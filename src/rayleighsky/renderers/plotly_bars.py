"""Plotly horizontal bar chart of relative scattering intensity."""

import plotly.graph_objects as go

from rayleighsky.models import WavelengthBand

_BG = "rgba(0,0,0,0)"
_AXIS_COLOR = "#94a3b8"
_TOOLTIP_BG = "#1e293b"
_TOOLTIP_BORDER = "#334155"


def render_intensity_chart(bands: tuple[WavelengthBand, ...]) -> go.Figure:
    """Render the wavelength table as horizontal bars, one per band.

    Band order is display order: the first band is drawn at the top.
    The value axis is hidden; names sit on the category axis and the
    tooltip carries wavelength and intensity.

    Args:
        bands: Ordered wavelength bands (e.g. physics.WAVELENGTH_BANDS).

    Returns:
        Plotly Figure object.
    """
    names = [b.name for b in bands]

    bar_trace = go.Bar(
        x=[b.intensity for b in bands],
        y=names,
        orientation="h",
        marker=dict(color=[b.color for b in bands], line=dict(width=0)),
        customdata=[b.wavelength for b in bands],
        hovertemplate="%{y} (%{customdata:.0f} nm)<br>intensity: %{x:.1f}<extra></extra>",
        name="intensity",
    )

    fig = go.Figure(data=[bar_trace])
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=192,
        bargap=0.25,
        hoverlabel=dict(
            bgcolor=_TOOLTIP_BG, bordercolor=_TOOLTIP_BORDER, font=dict(color="#ffffff")
        ),
        xaxis=dict(visible=False, fixedrange=True),
        # Reversed so the first band is on top, matching list order
        yaxis=dict(
            categoryorder="array",
            categoryarray=names,
            autorange="reversed",
            color=_AXIS_COLOR,
            fixedrange=True,
        ),
    )
    fig._config = {"displayModeBar": False}  # type: ignore[attr-defined]

    return fig
