"""Merging of adjacent captured output fragments.

A single logical output stream is often captured as several fragments
(one per print call). Adjacent fragments are concatenated before conversion
so they render as one block. Stderr fragments always stay separate.
"""

from typing import Sequence, TypeVar, Union

from .models import FragmentKind, OutputFragment

T = TypeVar("T")


def can_merge(first: object, second: object) -> bool:
    """Test whether two adjacent items should be merged.

    Both must be single-chunk OutputFragments and neither may be stderr
    output. Anything that is not an OutputFragment never merges.
    """
    return (
        isinstance(first, OutputFragment)
        and isinstance(second, OutputFragment)
        and not first.composite
        and not second.composite
        and not first.is_stderr
        and not second.is_stderr
    )


def merge_pair(first: OutputFragment, second: OutputFragment) -> OutputFragment:
    """Concatenate two fragments, keeping the kind and source of the first.

    The texts are joined by a line break unless both are stdout and one of
    them already supplies it at the seam.
    """
    separator = "\n"
    if first.kind == FragmentKind.STDOUT and second.kind == FragmentKind.STDOUT:
        if first.text.endswith("\n") or second.text.startswith("\n"):
            separator = ""

    merged = first.model_copy(update={"text": first.text + separator + second.text})
    return merged.with_source(first.source)


def merge_fragments(
    items: Sequence[Union[OutputFragment, T]],
) -> list[Union[OutputFragment, T]]:
    """Merge adjacent mergeable fragments of ``items``.

    Pairs are scanned from the end so a merge never disturbs pairs that
    have not been looked at yet; a run of mergeable fragments collapses
    into one. Items that are not OutputFragments are kept as barriers.
    Running this on its own result changes nothing.
    """
    result = list(items)
    for i in range(len(result) - 2, -1, -1):
        first, second = result[i], result[i + 1]
        if can_merge(first, second):
            result[i] = merge_pair(first, second)  # type: ignore[arg-type]
            del result[i + 1]
    return result
