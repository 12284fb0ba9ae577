"""Read-side lookups over User records."""

from protean.utils.globals import current_domain

from storefront.identity.user import User, normalize_email
from storefront.shared.paging import Page, fetch_all, paginate_items, parse_sort

USER_SORT_FIELDS = {"email", "name", "role", "created_at", "updated_at"}


def find_user_by_email(email: str) -> User | None:
    if not email:
        return None
    repo = current_domain.repository_for(User)
    return repo._dao.query.filter(email=normalize_email(email)).all().first


def get_user(user_id: str) -> User:
    return current_domain.repository_for(User).get(user_id)


def list_users(
    page: int = 0,
    size: int = 10,
    sort: str | None = None,
    email: str | None = None,
    phone: str | None = None,
    role: str | None = None,
    gender: str | None = None,
) -> Page:
    """Filtered, paged user listing for administrators.

    ``email`` and ``phone`` match as case-insensitive substrings; ``role`` and
    ``gender`` must match exactly.
    """
    queryset = current_domain.repository_for(User)._dao.query
    if role:
        queryset = queryset.filter(role=role.upper())
    if gender:
        queryset = queryset.filter(gender=gender.upper())

    users = fetch_all(queryset)
    if email:
        needle = email.strip().lower()
        users = [u for u in users if needle in (u.email or "").lower()]
    if phone:
        needle = phone.strip()
        users = [u for u in users if needle in (u.phone or "")]

    order_by = parse_sort(sort, USER_SORT_FIELDS, "-created_at")
    key = order_by.lstrip("-")
    users.sort(key=lambda u: (getattr(u, key) is None, getattr(u, key) or ""), reverse=order_by.startswith("-"))
    return paginate_items(users, page, size)
