# Services package.
#
#   subscription_service: CRUD + filtered listing + total cost for Subscription
#
# Service functions accept an AsyncSession as their first argument so that
# the router layer controls the transaction boundary via the ``get_db``
# dependency.
