"""
Static trigger tables for the heuristic analyzer.

Every table is ordered: category, intent and action lookups are first-match,
so reordering entries changes results.
"""
from __future__ import annotations

import re
from typing import Dict, Tuple

# --- Key points ---

KEY_POINT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "price": ("價格", "報價", "費用", "成本", "price", "cost", "quote"),
    "quantity": ("數量", "批量", "件", "quantity", "amount", "pieces"),
    "deadline": ("截止", "期限", "時間", "deadline", "due date", "urgent"),
    "meeting": ("會議", "討論", "見面", "meeting", "call", "discuss"),
    "contract": ("合約", "契約", "協議", "contract", "agreement"),
    "delivery": ("交貨", "配送", "物流", "delivery", "shipping"),
    "discount": ("折扣", "優惠", "discount", "promotion"),
    "payment": ("付款", "支付", "payment", "invoice"),
}

NUMERIC_PATTERN = re.compile(r"\d+[,.]?\d*")
MAX_NUMERIC_VALUES = 3

# --- Sentiment ---

POSITIVE_WORDS = (
    "感謝", "高興", "期待", "滿意", "優秀", "完美", "很好",
    "thank", "happy", "great", "excellent", "perfect", "appreciate",
)
URGENT_WORDS = (
    "緊急", "立即", "儘快", "馬上", "今天", "現在",
    "urgent", "immediately", "asap", "critical", "now",
)
NEGATIVE_WORDS = (
    "問題", "錯誤", "失望", "不滿", "投訴", "延遲",
    "problem", "issue", "disappointed", "complaint", "delay", "error",
)
SENTIMENT_THRESHOLD = 2

# --- Priority ---

URGENT_SUBJECT_WORDS = ("緊急", "urgent", "重要", "important", "立即", "immediate")
URGENT_CONTENT_WORDS = ("截止", "今天", "馬上", "deadline", "today", "asap")
BUSINESS_WORDS = ("訂單", "採購", "合約", "報價", "order", "purchase", "contract")
LARGE_NUMBER_PATTERN = re.compile(r"\$?\d{4,}|\d+[kKmM]")

URGENT_SUBJECT_SCORE = 20
URGENT_CONTENT_SCORE = 10
BUSINESS_SCORE = 15
LARGE_NUMBER_SCORE = 15

PRIORITY_THRESHOLDS = (
    (50, "high"),
    (30, "medium"),
)

# --- Intent ---

INTENT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "inquiry": ("詢問", "想了解", "請問", "inquiry", "question", "ask"),
    "purchase": ("採購", "訂購", "購買", "下單", "purchase", "order", "buy"),
    "complaint": ("投訴", "問題", "不滿", "complaint", "issue", "problem"),
    "follow_up": ("跟進", "後續", "確認", "follow up", "update", "status"),
    "negotiation": ("議價", "折扣", "優惠", "negotiate", "discount", "deal"),
}

# --- Urgency ---

# Synonyms are listed separately on purpose: each one adds its own weight.
URGENCY_WEIGHTS: Tuple[Tuple[str, int], ...] = (
    ("緊急", 30),
    ("urgent", 30),
    ("立即", 25),
    ("immediately", 25),
    ("今天", 20),
    ("today", 20),
    ("asap", 25),
    ("截止", 20),
    ("deadline", 20),
)

URGENCY_THRESHOLDS = (
    (50, "critical"),
    (30, "high"),
    (15, "medium"),
)

# --- Business value ---

# Bare-number alternatives only start at the head of a digit run, so a long
# run without a unit is scanned once instead of from every offset.
AMOUNT_PATTERN = re.compile(r"\$[\d,]+|(?<!\d)\d+[kKmM]|(?<![\d,])[\d,]+\s*元")
VALUE_THRESHOLDS = (
    (100_000, "very_high"),
    (50_000, "high"),
    (10_000, "medium"),
)
BULK_WORDS = ("大量", "批量", "bulk")
PARTNERSHIP_WORDS = ("合約", "contract", "partnership")

# --- Suggested action ---

SUGGESTED_ACTIONS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("報價", "quote", "price"), "Prepare and send a quotation"),
    (("會議", "meeting", "討論"), "Schedule a meeting"),
    (("確認", "confirm"), "Confirm the details and reply"),
    (("問題", "issue", "problem"), "Investigate the issue and propose a solution"),
    (("訂單", "order", "purchase"), "Process the order and confirm details"),
    (("緊急", "urgent"), "Handle immediately and reply"),
)
DEFAULT_ACTION = "Review and reply to the email"
NO_CONTENT_ACTION = "Review the email"
