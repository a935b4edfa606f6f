import plotly.express as px
import pandas as pd

SWEEP_COLUMNS = ["policy", "load_hits", "load_misses", "store_hits", "store_misses", "cycles"]


def export_sweep_chart(rows, path: str):
    if not rows:
        with open(path, "w") as f:
            f.write("<h1>Policy Sweep</h1><p>No data to display.</p>")
        return

    df = pd.DataFrame(rows)
    df['cycles'] = pd.to_numeric(df['cycles'], errors='coerce')
    df = df.dropna(subset=['cycles'])

    hover_data_cols = ['load_hits', 'load_misses', 'store_hits', 'store_misses']
    existing_hover_cols = [c for c in hover_data_cols if c in df.columns]

    fig = px.bar(
        df,
        x="policy",
        y="cycles",
        color="eviction" if "eviction" in df.columns else None,
        hover_data=existing_hover_cols,
        title="Cache Policy Sweep (Total Cycles)",
        labels={"policy": "Write-miss / write-hit / eviction", "cycles": "Total cycles"}
    )
    fig.update_layout(
        font=dict(family="Courier New, monospace", size=12),
        legend_title="Eviction"
    )

    fig.write_html(path, include_plotlyjs="cdn", full_html=True)


def export_sweep_ascii(rows):
    if not rows:
        return "No sweep results."

    widths = {col: max(len(col), *(len(str(row.get(col, ""))) for row in rows)) for col in SWEEP_COLUMNS}

    header = "  ".join(col.ljust(widths[col]) if col == "policy" else col.rjust(widths[col])
                       for col in SWEEP_COLUMNS)
    table = "Cache Policy Sweep\n"
    table += header + "\n"
    table += "-" * len(header) + "\n"
    for row in rows:
        cells = []
        for col in SWEEP_COLUMNS:
            value = str(row.get(col, ""))
            cells.append(value.ljust(widths[col]) if col == "policy" else value.rjust(widths[col]))
        table += "  ".join(cells) + "\n"

    best = min(rows, key=lambda row: row["cycles"])
    table += f"Fewest cycles: {best['policy']} ({best['cycles']} cycles)\n"
    return table
