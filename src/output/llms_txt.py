"""llms.txt generation."""

from typing import Dict, List, Optional


def generate_llms_txt(
    site_name: str,
    description: str,
    main_pages: List[Dict[str, str]],
    api_docs: Optional[str] = None,
    contact_email: Optional[str] = None,
) -> str:
    """
    Render an llms.txt file.

    Args:
        site_name: H1 title
        description: One-line blockquote summary
        main_pages: Dicts with title, url, description
        api_docs: Optional API documentation section body
        contact_email: Optional contact address

    Returns:
        Markdown text ending in a newline
    """
    sections = [
        f"# {site_name}",
        f"> {description}",
        "## Main Pages",
        "\n".join(
            f"- [{page['title']}]({page['url']}): {page['description']}"
            for page in main_pages
        ),
    ]

    if api_docs:
        sections.append(f"## API Documentation\n\n{api_docs}")

    if contact_email:
        sections.append(f"## Contact\n\nEmail: {contact_email}")

    return "\n\n".join(sections) + "\n"
