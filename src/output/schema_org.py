"""
Schema.org JSON-LD Builders

Structured data for generated pages: Article, HowTo, FAQPage and Product.
Optional fields left as None are omitted from the output.
"""

from typing import Any, Dict, List, Optional

SCHEMA_CONTEXT = "https://schema.org"


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None values, recursing into nested dicts and lists of dicts."""
    result = {}
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            value = _compact(value)
        elif isinstance(value, list):
            value = [_compact(v) if isinstance(v, dict) else v for v in value]
        result[key] = value
    return result


def generate_article_schema(
    title: str,
    description: str,
    url: str,
    date_published: str,
    author_name: str,
    author_url: Optional[str] = None,
    date_modified: Optional[str] = None,
    image_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build an Article document.

    dateModified defaults to datePublished.
    """
    return _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": title,
        "description": description,
        "url": url,
        "datePublished": date_published,
        "dateModified": date_modified or date_published,
        "author": {
            "@type": "Person",
            "name": author_name,
            "url": author_url,
        },
        "image": image_url,
    })


def generate_howto_schema(
    name: str,
    description: str,
    steps: List[Dict[str, str]],
    total_time: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a HowTo document.

    Args:
        name: HowTo title
        description: Summary
        steps: Dicts with name, text and optional image
        total_time: ISO 8601 duration (e.g. "PT30M")

    Returns:
        JSON-LD dict with 1-based step positions
    """
    return _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": "HowTo",
        "name": name,
        "description": description,
        "totalTime": total_time,
        "step": [
            {
                "@type": "HowToStep",
                "position": i,
                "name": step.get("name"),
                "text": step.get("text"),
                "image": step.get("image"),
            }
            for i, step in enumerate(steps, start=1)
        ],
    })


def generate_faq_schema(questions: List[Dict[str, str]]) -> Dict[str, Any]:
    """Build a FAQPage document from question/answer dicts."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": qa["question"],
                "acceptedAnswer": {
                    "@type": "Answer",
                    "text": qa["answer"],
                },
            }
            for qa in questions
        ],
    }


def generate_product_schema(
    name: str,
    description: str,
    image_url: str,
    price: float,
    currency: str,
    availability: str,
    rating_value: Optional[float] = None,
    review_count: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Build a Product document.

    aggregateRating is only included when both rating fields are given.
    """
    aggregate_rating = None
    if rating_value is not None and review_count is not None:
        aggregate_rating = {
            "@type": "AggregateRating",
            "ratingValue": rating_value,
            "reviewCount": review_count,
        }

    return _compact({
        "@context": SCHEMA_CONTEXT,
        "@type": "Product",
        "name": name,
        "description": description,
        "image": image_url,
        "offers": {
            "@type": "Offer",
            "price": price,
            "priceCurrency": currency,
            "availability": availability,
        },
        "aggregateRating": aggregate_rating,
    })
