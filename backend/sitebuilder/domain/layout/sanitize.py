import nh3

ALLOWED_TAGS = {
    "address", "article", "aside", "footer", "header", "hgroup", "main", "nav", "section",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "blockquote", "dd", "div", "dl", "dt", "figcaption", "figure", "hr", "li", "ol", "p", "pre", "ul",
    "a", "abbr", "b", "bdi", "bdo", "br", "cite", "code", "data", "dfn", "em", "i", "kbd", "mark",
    "q", "s", "samp", "small", "span", "strong", "sub", "sup", "time", "u", "var", "wbr",
    "caption", "col", "colgroup", "table", "tbody", "td", "tfoot", "th", "thead", "tr",
    "img",
}

ALLOWED_ATTRIBUTES = {
    "*": {"class", "data-align", "data-type", "data-size"},
    "img": {"src", "srcset", "alt", "title", "width", "height", "loading"},
    "figure": {"class", "data-type", "data-size", "data-align"},
    # rel is always rewritten through link_rel
    "a": {"href", "name", "target"},
}

ALLOWED_URL_SCHEMES = {"http", "https", "mailto"}


def sanitize_content(html: str) -> str:
    """Strip anything the rich-text editor is not allowed to persist."""
    if not html:
        return ""
    return nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        url_schemes=ALLOWED_URL_SCHEMES,
        link_rel="noopener noreferrer",
    )
