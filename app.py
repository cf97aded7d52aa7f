import logging

import streamlit as st
import pandas as pd
import plotly.express as px

from prefix_tree.bench import OPERATIONS, WORKLOADS, BenchConfig, build_workload, run_benchmark, summarize

logging.basicConfig(
    level=logging.INFO,
    format="[%(levelname)s] %(message)s",
)
log = logging.getLogger("prefix_tree.app")

# Configure page
st.set_page_config(
    page_title="Prefix Tree Bench",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.title("🌳 Prefix Tree Bench")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Workload")
    workload = st.selectbox("Key type", WORKLOADS)
    size = st.number_input("Keys", min_value=100, max_value=500_000, value=10_000, step=1_000)
    seed = st.number_input("Seed", min_value=0, value=0, step=1)
    prefix_freq = st.slider(
        "Prefix frequency",
        min_value=0.0, max_value=1.0, value=0.0,
        help="Higher values cluster generated words around shared prefixes (words only)",
        disabled=(workload != "words"),
    )
    hit_share = st.slider("Query hit share", min_value=0.0, max_value=1.0, value=0.5)
    repeats = st.number_input("Repeats", min_value=1, max_value=20, value=3, step=1)

    st.markdown("---")
    run = st.button("▶️ Run benchmark")

try:
    config = BenchConfig(
        workload=workload,
        size=int(size),
        seed=int(seed),
        prefix_freq=float(prefix_freq),
        hit_share=float(hit_share),
        repeats=int(repeats),
    )
except ValueError as e:
    log.warning("rejected configuration: %s", e)
    st.error(f"❌ Invalid configuration: {e}")
    st.stop()

if run:
    log.info("running benchmark: %s", config)
    with st.spinner("Running..."):
        st.session_state['results'] = run_benchmark(config)
        st.session_state['config'] = config
    log.info("benchmark finished: %d rows", len(st.session_state["results"]))

if 'results' not in st.session_state:
    st.info("👈 Pick a workload and press Run")

    st.subheader("Sample keys")
    keys, _, _ = build_workload(BenchConfig(workload=workload, size=10, seed=int(seed), repeats=1))
    st.dataframe(pd.DataFrame({"key": keys}), use_container_width=True)
    st.stop()

df = st.session_state['results']
cfg = st.session_state['config']
stats = df.attrs.get("stats", {})

col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Workload", cfg.workload)
with col2:
    st.metric("Keys", f"{cfg.size:,}")
with col3:
    st.metric("Trie nodes", f"{stats.get('nodes', 0):,}")
with col4:
    st.metric("Avg. branch factor", f"{stats.get('avg_branch_factor', 0.0):.2f}")

summary = summarize(df)

tab1, tab2, tab3 = st.tabs(["Summary", "Distribution", "Raw runs"])

with tab1:
    st.write("**ns per operation:**")
    st.dataframe(summary.round(0), use_container_width=True)
    fig = px.bar(summary, x="operation", y="median", error_y=summary["p95"] - summary["median"],
                 title="Median ns/op (error bar to p95)")
    fig.update_layout(xaxis_title="Operation", yaxis_title="ns/op")
    st.plotly_chart(fig, use_container_width=True)

with tab2:
    fig_box = px.box(df, x="operation", y="ns_per_op", points="all",
                     category_orders={"operation": list(OPERATIONS)},
                     title="ns/op across repeats")
    st.plotly_chart(fig_box, use_container_width=True)

with tab3:
    st.dataframe(df, use_container_width=True)

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Prefix Tree Bench
    </div>
    """,
    unsafe_allow_html=True
)
