from .exceptions import InvariantViolation

MAX_FEATURED_POSTS = 3


def assert_post(post, publish=False):
    if publish and not (post.content or "").strip():
        raise InvariantViolation("Cannot publish a post without content.")


def assert_featured_limit(*, featured_published: int) -> None:
    """`featured_published` counts the other featured posts already live."""
    if featured_published >= MAX_FEATURED_POSTS:
        raise InvariantViolation(
            f"Only {MAX_FEATURED_POSTS} published posts can be featured at a time. "
            "Remove a highlight before adding another."
        )
