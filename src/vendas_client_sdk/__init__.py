from .access_control import (
    can_delete_seller,
    can_edit_seller,
    can_manage_sellers,
    can_view_screen,
    needs_profile_setup,
    require,
    visible_screens,
)
from .auth_store import AuthStore
from .cart import (
    EMPTY_CART,
    Cart,
    CartLine,
    add_product,
    can_increment,
    cart_total,
    decrement,
    increment,
    item_count,
    remove_line,
    set_quantity,
)
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    InvalidResponseError,
    NotFoundError,
    PermissionDenied,
    RateLimitError,
    RemoteError,
    RemoteValidationError,
    ServerError,
    TransportError,
    ValidationError,
)
from .http_client import HttpClient
from .models import (
    Client,
    NegotiationType,
    Product,
    Role,
    Sale,
    SaleCreate,
    SaleHeader,
    SaleItem,
    SaleStatus,
    ScreenPermission,
    ScreenPermissionCreate,
    SessionData,
    TokenResponse,
    UploadedFile,
    UserRecord,
)
from .permission_matrix import (
    build_permission_payload,
    ensure_unique_permission,
    find_permission,
    permission_flags,
    permissions_for_screen,
    users_with_access,
    users_without_access,
)
from .sale_assembly import build_sale, build_sale_header, generate_sale_number
from .sale_flow import SaleFlow, SaleFlowState
from .screens import GRANTABLE_SCREENS, SCREENS, ScreenSpec
from .session import ApiSession
from .ui_errors import UserFacingError, to_user_facing_error

__version__ = "0.1.0"
