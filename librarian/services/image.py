"""Generator image derivation."""

from __future__ import annotations

from librarian.state.model import PipelineState

__all__ = ["derive_image"]


def derive_image(
    language: str,
    image_override: str,
    default_repository: str,
    state: PipelineState | None,
) -> str:
    """Compute the generator image reference.

    An override is returned verbatim. Otherwise the image is
    ``google-cloud-<language>-generator`` tagged with the state's image tag
    ("latest" without state), prefixed by ``default_repository`` when set.
    """
    if image_override:
        return image_override

    relative_image = f"google-cloud-{language}-generator"
    tag = "latest" if state is None else state.image_tag
    if not default_repository:
        return f"{relative_image}:{tag}"
    return f"{default_repository}/{relative_image}:{tag}"
