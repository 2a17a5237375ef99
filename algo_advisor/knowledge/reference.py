"""
Reference knowledge base: the ten hand-authored algorithm-selection rules.

``REFERENCE_RULES`` is the authoring table (plain dicts, KB order matters).
``reference_knowledge_base()`` validates and freezes it once per process and
returns the same ``KnowledgeBase`` instance on every later call.

Rule overview
-------------
    id          weight  condition                                  candidates
    lda         0.90    classification + gaussian                  LDA
    qda         0.85    classification + gaussian                  QDA
    tree        0.80    non-gaussian                               Decision Tree, Random Forest, Gradient Boosting
    imbalance   0.75    class imbalance                            Logistic (class_weight), Random Forest (balanced), XGBoost
    p_gt_n      0.88    p >> n                                     Ridge, Lasso, ElasticNet
    fp          0.70    false positives costly                     Logistic Regression, Linear SVM
    fn          0.70    false negatives costly                     Random Forest, Boosting
    regression  0.90    regression                                 Linear Regression, Random Forest Regressor, XGBoost Regressor
    clustering  0.85    clustering                                 K-Means, DBSCAN, Hierarchical
    time        0.90    time-series                                ARIMA, Prophet, LSTM
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from algo_advisor.knowledge.base import KnowledgeBase

REFERENCE_RULES: tuple[dict[str, Any], ...] = (
    {
        "id": "lda",
        "weight": 0.9,
        "condition": {"problemType": "classification", "gaussian": True},
        "candidates": ["LDA"],
        "rationale": "Gaussian data allows optimal linear boundaries.",
    },
    {
        "id": "qda",
        "weight": 0.85,
        "condition": {"problemType": "classification", "gaussian": True},
        "candidates": ["QDA"],
        "rationale": "Different class spread requires curved boundaries.",
    },
    {
        "id": "tree",
        "weight": 0.8,
        "condition": {"gaussian": False},
        "candidates": ["Decision Tree", "Random Forest", "Gradient Boosting"],
        "rationale": "Trees make no distribution assumptions.",
    },
    {
        "id": "imbalance",
        "weight": 0.75,
        "condition": {"classImbalance": True},
        "candidates": ["Logistic (class_weight)", "Random Forest (balanced)", "XGBoost"],
        "rationale": "Imbalance skews learning toward majority class.",
    },
    {
        "id": "p_gt_n",
        "weight": 0.88,
        "condition": {"pGreaterThanN": True},
        "candidates": ["Ridge", "Lasso", "ElasticNet"],
        "rationale": "Too many features increase variance → regularization needed.",
    },
    {
        "id": "fp",
        "weight": 0.7,
        "condition": {"errorFocus": "fp"},
        "candidates": ["Logistic Regression", "Linear SVM"],
        "rationale": "Precision reduces false alarms.",
    },
    {
        "id": "fn",
        "weight": 0.7,
        "condition": {"errorFocus": "fn"},
        "candidates": ["Random Forest", "Boosting"],
        "rationale": "Recall reduces missed positives.",
    },
    {
        "id": "regression",
        "weight": 0.9,
        "condition": {"problemType": "regression"},
        "candidates": ["Linear Regression", "Random Forest Regressor", "XGBoost Regressor"],
        "rationale": "Baseline + non-linear regressors cover most cases.",
    },
    {
        "id": "clustering",
        "weight": 0.85,
        "condition": {"problemType": "clustering"},
        "candidates": ["K-Means", "DBSCAN", "Hierarchical"],
        "rationale": "Cluster shape and density drive algorithm choice.",
    },
    {
        "id": "time",
        "weight": 0.9,
        "condition": {"problemType": "time-series"},
        "candidates": ["ARIMA", "Prophet", "LSTM"],
        "rationale": "Temporal dependency breaks random split assumptions.",
    },
)


@lru_cache(maxsize=1)
def reference_knowledge_base() -> KnowledgeBase:
    """Return the validated reference knowledge base (built once, then cached)."""
    return KnowledgeBase(REFERENCE_RULES)
