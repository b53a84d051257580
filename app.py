from __future__ import annotations

import logging

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from congruent import (
    GENERATORS,
    bin_values,
    counts_frame,
    chi_square_uniformity,
    describe_uniformity,
    export_to_csv,
    generate_samples,
    make_generator,
    serial_correlation,
)
from congruent import config

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger("congruent.app")

st.set_page_config(page_title="Congruential PRNG Explorer", layout="wide")

st.title("Congruential PRNG Explorer")
st.caption("LCG, Park-Miller and Schrage generators with unbiased bounded draws and skip-ahead.")

variants = list(GENERATORS)

with st.sidebar:
    st.header("Generator setup")

    mode = st.radio("Mode", ["Sample a range", "Skip ahead"], index=0)

    variant = st.selectbox("Variant", variants, index=variants.index(config.DEFAULT_VARIANT))
    seed = st.number_input("Seed (0 = default)", min_value=0, max_value=2**32 - 1, value=config.DEFAULT_SEED, step=1)

    if mode == "Sample a range":
        lower = st.number_input("Lower bound", min_value=0, max_value=2**32 - 1, value=config.DEFAULT_LOWER, step=1)
        upper = st.number_input("Upper bound", min_value=0, max_value=2**32 - 1, value=config.DEFAULT_UPPER, step=1)
        count = st.number_input("Draws per stream", min_value=100, max_value=1_000_000, value=config.DEFAULT_SAMPLE_COUNT, step=100)
        streams = st.slider("Sub-streams", min_value=1, max_value=8, value=config.DEFAULT_STREAMS, step=1)
        alpha = st.slider("Significance level", min_value=0.001, max_value=0.10, value=config.UNIFORMITY_ALPHA, step=0.001, format="%.3f")
        run = st.button("Draw samples", type="primary")
    else:
        steps = st.number_input("Steps (negative jumps back)", min_value=-(10**15), max_value=10**15, value=10_000, step=1)
        run = st.button("Jump", type="primary")


def render_samples(df: pd.DataFrame, lower: int, upper: int, alpha: float):
    lo, hi = min(lower, upper), max(lower, upper)
    binned_axis = hi - lo + 1 > config.MAX_CATEGORIES
    if binned_axis:
        binned = bin_values(df["value"], lo, hi)
        res = chi_square_uniformity(binned, 0, config.HISTOGRAM_BINS - 1, alpha=alpha)
    else:
        res = chi_square_uniformity(df["value"], lo, hi, alpha=alpha)
    corr = None
    if hi > lo:
        corr = serial_correlation(df.loc[df["stream"] == 0, "value"].astype(float).tolist())

    st.subheader("Results")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Draws", f"{res.sample_size:,}")
    c2.metric("Chi-square", f"{res.chi_square:.2f}", f"{res.degrees_of_freedom} dof")
    c3.metric("p-value", f"{res.p_value:.4f}")
    if corr is not None:
        c4.metric("Lag-1 correlation", f"{corr.coefficient:+.4f}", f"p = {corr.p_value:.3f}")
    else:
        c4.metric("Lag-1 correlation", "n/a")

    rec = describe_uniformity(res)
    st.success(rec) if res.is_uniform else st.warning(rec)

    left, right = st.columns(2)

    with left:
        st.markdown("#### Observed vs expected counts")
        if len(res.counts) <= 200:
            counts_df = counts_frame(res, binned=binned_axis)
            fig = px.bar(counts_df, x=counts_df.columns[0], y="count")
            if binned_axis:
                width = (hi - lo + 1) / config.HISTOGRAM_BINS
                fig.update_xaxes(title_text=f"bin (each about {width:,.0f} values wide, starting at {lo:,})")
            fig.add_hline(y=res.expected, line_dash="dash", annotation_text="expected")
        else:
            fig = px.histogram(df, x="value", nbins=50)
        fig.update_layout(height=360)
        st.plotly_chart(fig, use_container_width=True)

    with right:
        st.markdown("#### Successive pairs (first stream)")
        first = df.loc[df["stream"] == 0, "value"].head(5000).tolist()
        fig2 = go.Figure()
        fig2.add_trace(
            go.Scattergl(
                x=first[:-1],
                y=first[1:],
                mode="markers",
                marker=dict(size=3),
                name="(x_n, x_n+1)",
            )
        )
        fig2.update_layout(xaxis_title="x_n", yaxis_title="x_n+1", height=360)
        st.plotly_chart(fig2, use_container_width=True)

    if df["stream"].nunique() > 1:
        st.markdown("#### Per-stream means")
        means = df.groupby("stream", as_index=False)["value"].mean()
        fig3 = px.bar(means, x="stream", y="value")
        fig3.add_hline(y=(lo + hi) / 2, line_dash="dash", annotation_text="uniform mean")
        fig3.update_layout(height=320)
        st.plotly_chart(fig3, use_container_width=True)

    st.markdown("#### Download data")
    csv_str = export_to_csv(df)
    st.download_button(
        label="Download CSV",
        data=csv_str.encode("utf-8"),
        file_name="samples.csv",
        mime="text/csv",
    )

    return res, corr


def render_jump(variant: str, seed: int, steps: int):
    gen = make_generator(variant, seed)
    before = gen.state
    output = gen.skip(steps)
    back = gen.__class__(state=gen.state, is_seeded=True)
    back.skip(-steps)

    st.subheader("Skip-ahead")
    st.json(
        {
            "variant": variant,
            "modulus": str(gen.recurrence.modulus),
            "period": str(gen.recurrence.period),
            "state_before": str(before),
            "steps": int(steps),
            "state_after": str(gen.state),
            "output": output,
            "jump_back_restores_state": back.state == before,
        }
    )


if run:
    if mode == "Sample a range":
        logger.info("sampling %s seed=%d range=[%d, %d]", variant, seed, lower, upper)
        df = generate_samples(
            variant=variant,
            seed=int(seed),
            count=int(count),
            lower=int(lower),
            upper=int(upper),
            streams=int(streams),
        )
        render_samples(df, int(lower), int(upper), float(alpha))
    else:
        render_jump(variant, int(seed), int(steps))
else:
    st.info("Pick a generator in the sidebar and press the button.")
