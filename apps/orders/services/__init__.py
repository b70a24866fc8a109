"""
Orders app services layer.

Order lifecycle (create, status, total, delete) and the card collection
attached to each order.
"""

from .exceptions import (
    OrdersServiceError,
    OrderNotFoundError,
    CardNotFoundError,
    OrderClosedError,
    InvalidOrderDataError,
    GroupNotFoundError,
    NotMemberError,
    InsufficientPermissionsError,
    CascadeDeleteError,
)

from .order_management import (
    create_order,
    update_order_status,
    set_total_value,
    delete_order,
    get_order_for_member,
    get_group_orders,
)

from .card_management import (
    ContributorTotal,
    CardAggregation,
    aggregate_cards,
    add_card,
    remove_card,
    get_order_cards,
    get_order_summary,
)


__all__ = [
    # Exceptions
    'OrdersServiceError',
    'OrderNotFoundError',
    'CardNotFoundError',
    'OrderClosedError',
    'InvalidOrderDataError',
    'GroupNotFoundError',
    'NotMemberError',
    'InsufficientPermissionsError',
    'CascadeDeleteError',

    # Order Management
    'create_order',
    'update_order_status',
    'set_total_value',
    'delete_order',
    'get_order_for_member',
    'get_group_orders',

    # Card Management
    'ContributorTotal',
    'CardAggregation',
    'aggregate_cards',
    'add_card',
    'remove_card',
    'get_order_cards',
    'get_order_summary',
]
