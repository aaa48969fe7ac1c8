class MerchNexusError(Exception):
    pass


class ValidationError(MerchNexusError):
    pass


class NotFound(MerchNexusError):
    pass


class UserNotFound(NotFound):
    pass


class ProductNotFound(NotFound):
    pass


class ReferentialIntegrityError(NotFound):
    """The store rejected a write because a referenced row does not exist."""


class NotFoundOrForbidden(NotFound):
    """The row is absent or owned by someone else; callers cannot tell which."""


class CollectionNotFoundOrForbidden(NotFoundOrForbidden):
    pass


class SavedProductNotFound(NotFoundOrForbidden):
    pass


class StoreUnavailable(MerchNexusError):
    pass
