import plotly.graph_objects as go
from typing import List

from canslim_india.analysts.models import EpsPoint
from canslim_india.utils.formatting import eps_trend_to_df


def create_eps_chart(points: List[EpsPoint]) -> go.Figure | None:
    """Bar chart of recent YoY EPS growth %. Returns None when there is nothing to plot."""
    df = eps_trend_to_df(points)
    if df.empty:
        return None

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=df["quarter"],
        y=df["value"],
        marker_color=df["color"].tolist(),
        text=df["value"].round(1).astype(str) + "%",
        textposition="outside",
        hovertemplate="%{x}: %{y}%<extra></extra>",
    ))

    fig.update_layout(
        height=300,
        showlegend=False,
        template="plotly_dark",
        margin=dict(l=10, r=10, t=30, b=10),
        yaxis=dict(visible=False),
        xaxis=dict(type="category"),
    )
    return fig
