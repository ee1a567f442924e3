from dishka import Provider as _DishkaProvider

from solrbridge.util.di.scope import Scope


class Provider(_DishkaProvider):
    """Base for solrbridge DI providers.

    Defaults to the UOW scope; app-lifetime dependencies declare
    ``scope=Scope.APP`` explicitly.
    """

    scope = Scope.UOW
