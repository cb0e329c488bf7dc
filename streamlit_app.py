import streamlit as st
import pandas as pd
import seaborn as sns
import matplotlib.pyplot as plt

from knnsearch import config
from knnsearch.dataset import dataset_from_frame, parse_datapoint
from knnsearch.distance import Metric
from knnsearch.errors import KnnError
from knnsearch.knn import train_test_split
from knnsearch.kspec import parse_k_spec
from knnsearch.pipeline import predict, search

st.set_page_config(
    page_title="k-NN Explorer",
    page_icon="📊",
    layout="wide"
)

st.title("📊 k-Nearest Neighbors Explorer")
st.markdown("Upload a CSV file, choose feature and label columns, then search for the best k or classify a single row")

# File upload
uploaded_file = st.file_uploader(
    "Choose a CSV file",
    type=['csv'],
    help="Numeric feature columns plus one label column"
)

if uploaded_file is not None:
    df = pd.read_csv(uploaded_file, dtype=str, keep_default_na=False, skipinitialspace=True)
    st.success(f"✅ Data loaded successfully! Shape: {df.shape[0]} rows × {df.shape[1]} columns")

    st.subheader("📋 Data Preview")
    st.dataframe(df.head(), use_container_width=True)

    # Column selection
    col1, col2 = st.columns(2)
    with col1:
        label_col = st.selectbox("Label column:", list(df.columns), index=len(df.columns) - 1)
    with col2:
        feature_cols = st.multiselect(
            "Feature columns:",
            [c for c in df.columns if c != label_col],
            default=[c for c in df.columns if c != label_col],
        )

    metric_name = st.radio("Distance:", [m.value for m in Metric], horizontal=True)

    if not feature_cols:
        st.info("👆 Select at least one feature column")
    else:
        try:
            dataset = dataset_from_frame(df, feature_cols, label_col)
        except KnnError as e:
            st.error(f"❌ {e}")
            dataset = None

        if dataset is not None:
            col1, col2, col3 = st.columns(3)
            with col1:
                st.metric("Rows", len(dataset))
            with col2:
                st.metric("Features", dataset.feature_length)
            with col3:
                st.metric("Labels", len(dataset.label_counts()))

            search_tab, predict_tab = st.tabs(["🔎 Search k", "🎯 Predict"])

            with search_tab:
                k_text = st.text_input("k values (N, A-B or A-B,S):", config.DEFAULT_SEARCH_K)
                test_fraction = st.slider(
                    "Test fraction (rows taken from the end):",
                    min_value=0.05, max_value=0.95,
                    value=config.DEFAULT_TEST_FRACTION, step=0.05,
                )
                if st.button("Run search"):
                    try:
                        split = train_test_split(dataset, test_fraction)
                        result = search(split, metric_name, parse_k_spec(k_text))
                    except KnnError as e:
                        st.error(f"❌ {e}")
                    else:
                        col1, col2 = st.columns(2)
                        with col1:
                            st.metric("Best k", result.best_k)
                            st.metric("Accuracy", f"{result.best_accuracy:.1%}")
                            st.write(f"Train: {result.train_size} rows, test: {result.test_size} rows")
                            st.dataframe(result.to_frame(), use_container_width=True)
                        with col2:
                            fig, ax = plt.subplots(figsize=(8, 5))
                            sns.lineplot(data=result.to_frame(), x="k", y="accuracy", marker="o", ax=ax)
                            ax.axvline(result.best_k, color="grey", linestyle="--")
                            plt.title("Test accuracy by k")
                            plt.tight_layout()
                            st.pyplot(fig)
                            plt.close()

            with predict_tab:
                datapoint_text = st.text_input(
                    f"Datapoint ({', '.join(feature_cols)}):",
                    ",".join(str(v) for v in next(iter(dataset)).features),
                )
                k_single = st.text_input("k:", config.DEFAULT_PREDICT_K)
                if st.button("Predict"):
                    try:
                        datapoint = parse_datapoint(datapoint_text, len(feature_cols))
                        prediction = predict(dataset, datapoint, metric_name, k_single)
                    except KnnError as e:
                        st.error(f"❌ {e}")
                    else:
                        st.metric("Predicted label", str(prediction.label))
                        votes = pd.DataFrame({
                            'Label': [str(label) for label in prediction.votes],
                            'Votes': list(prediction.votes.values()),
                            'Share': list(prediction.shares().values()),
                        })
                        st.dataframe(votes, use_container_width=True)

else:
    st.info("👆 Please upload a CSV file to begin")

    st.subheader("📋 Expected Data Structure")
    st.write("""
    Your CSV file should contain:
    - **Numeric feature columns** (every cell a finite number)
    - **One label column** (any text; only equality is used)

    A sample file can be generated with `python data/generate_iris.py`.
    """)
