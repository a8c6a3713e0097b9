#!/usr/bin/env python3
"""
Quick script to run every notebook section end to end
"""

from sparkml_notebook.config import get_config
from sparkml_notebook.notebook import SparkMLNotebook


def run_notebook():
    print("=" * 60)
    print("Spark ML Notebook")
    print("=" * 60)

    config = get_config()

    print("\n1. Starting notebook...")
    with SparkMLNotebook(config) as notebook:
        print("✓ Notebook initialized")

        print("\n2. DataFrame basics...")
        frames = notebook.run_dataframe_basics()
        print(f"   - People rows: {frames['summary']['row_count']}")
        print(f"   - Older than 21: {', '.join(frames['adults'])}")

        print("\n3. Text file actions...")
        text = notebook.run_text_actions()
        print(f"   - Lines: {text['line_count']}, with 'Spark': {text['keyword_lines']}")

        print("\n4. Fitting the text classifier...")
        ml = notebook.run_ml_pipeline(save_model=True)
        print(f"   - Training AUC: {ml['training_auc']:.4f}")
        print(f"   - Model saved to: {ml['saved_to']}")

        print("\n5. Predicting with the saved model...")
        for row in notebook.predict_texts(["spark streaming", "hadoop cluster"]):
            print(f"   - {row['text']!r} --> {row['prediction']}")

    print("\n" + "=" * 60)
    print("✓ Notebook finished")
    print("=" * 60)


if __name__ == "__main__":
    try:
        run_notebook()
    except Exception as e:
        print(f"\n❌ Error: {e}")
        import traceback
        traceback.print_exc()
