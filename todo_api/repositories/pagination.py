from typing import Optional, Sequence

from todo_api.repositories.codec import decode
from todo_api.repositories.keys import page_token_from_key
from todo_api.schemas.todo import TodoPage


def normalize(
    items: Optional[Sequence[dict]], continuation_key: Optional[dict]
) -> TodoPage:
    """Fold the four Query result shapes into one page.

    items / key present  -> decoded items + page token
    items only           -> decoded items, no token
    key only             -> empty items + page token (not expected from Query)
    neither              -> empty page

    A single undecodable item raises MalformedStoreItem for the whole page.
    """
    decoded = [decode(item) for item in items] if items else []
    return TodoPage(items=decoded, page_token=page_token_from_key(continuation_key))
