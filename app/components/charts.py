"""Chart components for the Streamlit app."""

from __future__ import annotations

import plotly.graph_objects as go

from app.components.theme import TIER_COLORS, make_rgba
from taxtiers.analytics.sweep import IncomeSweep
from taxtiers.core.results import DerivedResult, ImpactTier


def tier_comparison_chart(result: DerivedResult) -> go.Figure:
    """Bar chart of tax owed under the baseline and each legal tier."""
    labels = ["Right now", "Optimize", "Redirect"]
    kinds = ["current", "optimize", "redirect"]
    values = [result.current.actual_tax, result.optimize.tax, result.redirect.tax]

    fig = go.Figure(
        go.Bar(
            x=labels,
            y=values,
            marker_color=[TIER_COLORS[k] for k in kinds],
            text=[f"${v:,.0f}" for v in values],
            textposition="outside",
        )
    )
    fig.update_layout(
        title="Federal Income Tax Owed by Strategy",
        yaxis_title="Tax ($/yr)",
        showlegend=False,
    )
    return fig


def savings_chart(result: DerivedResult) -> go.Figure:
    """Horizontal bars of money kept per year under each tier."""
    scenarios = result.scenarios
    fig = go.Figure(
        go.Bar(
            x=[s.savings for s in scenarios],
            y=[s.kind.title() for s in scenarios],
            orientation="h",
            marker_color=[TIER_COLORS[s.kind] for s in scenarios],
            text=[f"${s.savings:,.0f}" for s in scenarios],
            textposition="auto",
        )
    )
    fig.update_layout(
        title="Kept From the Treasury per Year",
        xaxis=dict(tickformat="$,.0f"),
        yaxis=dict(autorange="reversed", tickformat=""),
        showlegend=False,
    )
    return fig


def income_sweep_chart(sweep: IncomeSweep, marker_income: float | None = None) -> go.Figure:
    """Tax owed vs gross income for the baseline and both legal tiers."""
    fig = go.Figure()
    series = [
        ("current", "Right now", sweep.current_tax),
        ("optimize", "Optimize", sweep.optimize_tax),
        ("redirect", "Redirect", sweep.redirect_tax),
    ]
    for kind, name, values in series:
        fig.add_trace(
            go.Scatter(
                x=sweep.incomes,
                y=values,
                mode="lines",
                line=dict(color=TIER_COLORS[kind], width=2),
                name=name,
            )
        )
    fig.add_trace(
        go.Scatter(
            x=sweep.incomes,
            y=sweep.withholding,
            mode="lines",
            line=dict(color=make_rgba(TIER_COLORS["withhold"], 0.6), width=1, dash="dot"),
            name="Paid in",
        )
    )
    if marker_income is not None:
        fig.add_vline(
            x=marker_income,
            line_dash="dash",
            line_color="#9E9E9E",
            line_width=1.5,
            annotation_text="You",
            annotation_font_size=11,
            annotation_font_color="#757575",
        )
    fig.update_layout(
        title="Tax Owed by Income",
        xaxis=dict(title="Gross income", tickformat="$,.0f"),
        yaxis_title="Tax ($/yr)",
    )
    return fig


def impact_chart(tier: ImpactTier) -> go.Figure:
    """Annual aggregate for each population slice of one tier."""
    color = TIER_COLORS[tier.kind]
    fig = go.Figure(
        go.Bar(
            x=[f"{row.fraction:.0%}" for row in tier.rows],
            y=[row.annual for row in tier.rows],
            marker_color=color,
            customdata=[row.biweekly for row in tier.rows],
            hovertemplate="%{y:$,.0f}/yr<br>%{customdata:$,.0f} every two weeks<extra></extra>",
        )
    )
    fig.update_layout(
        title=f"{tier.label}: {tier.description}",
        xaxis_title="Share of the workforce",
        yaxis_title="Per year",
        showlegend=False,
    )
    return fig
