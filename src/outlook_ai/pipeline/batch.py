from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from outlook_ai.ai.enhancer import AIEnhancer
from outlook_ai.models import AnalysisResult, EmailText
from outlook_ai.pipeline.enhance import analyze_with_enhancement
from outlook_ai.pipeline.orchestrator import analyze_email

logger = logging.getLogger(__name__)


def analyze_batch(
    emails: Sequence[EmailText],
    enhancer: Optional[AIEnhancer] = None,
    *,
    concurrency: int = 5,
    pause_seconds: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> List[AnalysisResult]:
    """
    Analyze emails independently and return results in input order.

    Without an enhancer there is nothing to pace. With one, emails are sent in
    chunks of `concurrency` with a pause between chunks so the external
    service is not flooded.
    """
    if enhancer is None:
        return [analyze_email(email) for email in emails]

    size = max(1, concurrency)
    results: List[AnalysisResult] = []
    chunks = [emails[i:i + size] for i in range(0, len(emails), size)]

    with ThreadPoolExecutor(max_workers=size) as pool:
        for index, chunk in enumerate(chunks):
            if index and pause_seconds > 0:
                sleep(pause_seconds)
            logger.debug("Analyzing batch chunk %d/%d (%d emails)", index + 1, len(chunks), len(chunk))
            # map() keeps input order regardless of completion order.
            results.extend(pool.map(lambda email: analyze_with_enhancement(email, enhancer), chunk))

    return results
