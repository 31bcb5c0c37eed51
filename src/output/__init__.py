"""
Output Module

Publishable artifacts for generated content:
- schema.org JSON-LD documents (Article, HowTo, FAQPage, Product)
- llms.txt site summaries
"""

from .schema_org import (
    generate_article_schema,
    generate_howto_schema,
    generate_faq_schema,
    generate_product_schema,
)
from .llms_txt import generate_llms_txt

__all__ = [
    "generate_article_schema",
    "generate_howto_schema",
    "generate_faq_schema",
    "generate_product_schema",
    "generate_llms_txt",
]
