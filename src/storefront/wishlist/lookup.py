from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.wishlist.wishlist import Wishlist


def find_wishlist(customer_id) -> Wishlist | None:
    repo = current_domain.repository_for(Wishlist)
    found = repo._dao.query.filter(customer_id=str(customer_id)).all().items
    return repo.get(found[0].id) if found else None


def load_wishlist(customer_id) -> Wishlist:
    wishlist = find_wishlist(customer_id)
    if wishlist is None:
        raise ObjectNotFoundError({"wishlist": ["Wishlist not found"]})
    return wishlist


def load_or_open_wishlist(customer_id) -> Wishlist:
    return find_wishlist(customer_id) or Wishlist.open(customer_id)


def find_by_share_token(token) -> Wishlist | None:
    """Public lookup: a token only resolves while the wishlist is still public."""
    if not token:
        return None
    repo = current_domain.repository_for(Wishlist)
    found = repo._dao.query.filter(share_token=token, is_public=True).all().items
    return repo.get(found[0].id) if found else None
