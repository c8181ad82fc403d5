import math

import plotly.graph_objects as go


def _grid_step(extent):
    """1 km grid lines, thinned to roughly ten per axis for large areas"""
    return max(1, math.ceil(extent / 10))


def create_coverage_plot(result, length, width, radius):
    """Create a Plotly figure showing the coverage layout"""
    fig = go.Figure()

    step_x, step_y = _grid_step(width), _grid_step(length)
    for x in range(0, int(width) + 1, step_x):
        fig.add_shape(type="line", x0=x, y0=0, x1=x, y1=length,
                      line=dict(color="rgba(148,163,184,0.3)", width=1))
    for y in range(0, int(length) + 1, step_y):
        fig.add_shape(type="line", x0=0, y0=y, x1=width, y1=y,
                      line=dict(color="rgba(148,163,184,0.3)", width=1))

    # Target area
    fig.add_shape(
        type="rect", x0=0, y0=0, x1=width, y1=length,
        line=dict(color="#f59e0b", width=2, dash="dash"),
    )

    # Coverage footprints
    for p in result.positions:
        fig.add_shape(
            type="circle",
            x0=p.x - radius, y0=p.y - radius, x1=p.x + radius, y1=p.y + radius,
            line=dict(color="rgba(6,182,212,0.8)", width=1),
            fillcolor="rgba(6,182,212,0.12)",
        )

    fig.add_trace(go.Scatter(
        x=[p.x for p in result.positions],
        y=[p.y for p in result.positions],
        mode='markers',
        name='Devices',
        marker=dict(size=6, color='#0891b2'),
        text=[f"#{i + 1} (row {p.row}, col {p.col})" for i, p in enumerate(result.positions)],
        hoverinfo='text',
    ))

    margin = radius + 1
    fig.update_layout(
        title="Coverage Layout",
        xaxis_title="Width (km)",
        yaxis_title="Length (km)",
        showlegend=True,
        xaxis=dict(range=[-margin, width + margin]),
        yaxis=dict(range=[-margin, length + margin]),
        xaxis_scaleanchor="y",
        xaxis_scaleratio=1,
    )

    return fig


def create_type_breakdown(stats):
    """Pie chart of devices per type"""
    labels = list(stats.devices_by_type)
    fig = go.Figure(go.Pie(
        labels=labels,
        values=[stats.devices_by_type[k] for k in labels],
        hole=0.4,
    ))
    fig.update_layout(title="Devices by Type")
    return fig
