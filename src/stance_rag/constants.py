# src/stance_rag/constants.py
"""Defaults for retrieval, filtering and classification.

These can be overridden through SearchConfig (see stance_rag.config).
"""

# Retrieval request parameters
DEFAULT_TOP_K = 5  # Snippets requested per search
DEFAULT_SNIPPET_SIZE = 2048  # Tokens per snippet

# Configuration bounds surfaced to the UI
TOP_K_MIN = 1
TOP_K_MAX = 50
SNIPPET_SIZE_MIN = 512
SNIPPET_SIZE_MAX = 4096

# Score filtering
DEFAULT_ENABLE_SCORE_FILTERING = True
DEFAULT_MIN_SIMILARITY_SCORE = 0.7  # Drop snippets below this score
DEFAULT_WARN_THRESHOLD = 0.8  # Warn when the best surviving score is below this

# Timeouts (seconds)
DEFAULT_REQUEST_TIMEOUT_SEC = 10.0  # Evidence backend
DEFAULT_CLASSIFIER_TIMEOUT_SEC = 15.0  # Trigger classification call

# Trigger classification
DEFAULT_CLASSIFIER_MAX_TOKENS = 200  # Output budget for the classification call
DEFAULT_HISTORY_TURNS = 3  # Recent user/assistant pairs shown to the classifier

# Message heuristics
SUBSTANTIAL_MESSAGE_MIN_CHARS = 5
CLEAR_QUESTION_MIN_CHARS = 10

# Evidence backend (Pinecone Assistant context API)
DEFAULT_BACKEND_HOST = "https://prod-1-data.ke.pinecone.io"
DEFAULT_BACKEND_API_VERSION = "2025-04"
