from typing import Union

import tether.query

class Field:
    """Base class for an object representing a single field on a model.

    Fields correspond to database columns. Comparing a field to a value builds a query expression,
    so `Post.user_id == 5` can be passed straight to `where`.
    """

    def __init__(self, column=None, model=None):
        self.column = column
        self.model = model

    def __eq__(self, value: Union[int, str, float, None]):
        return tether.query.SingleColumnExpression(self.model, self.column, '=', value)

    def __ne__(self, value: Union[int, str, float, None]):
        return tether.query.SingleColumnExpression(self.model, self.column, '!=', value)

    def __lt__(self, value: Union[int, str, float]):
        return tether.query.SingleColumnExpression(self.model, self.column, '<', value)

    def __le__(self, value: Union[int, str, float]):
        return tether.query.SingleColumnExpression(self.model, self.column, '<=', value)

    def __gt__(self, value: Union[int, str, float]):
        return tether.query.SingleColumnExpression(self.model, self.column, '>', value)

    def __ge__(self, value: Union[int, str, float]):
        return tether.query.SingleColumnExpression(self.model, self.column, '>=', value)

    def __lshift__(self, value: list):
        return tether.query.SingleColumnExpression(self.model, self.column, 'in', value)

    # in case people forget which way the arrows go, lol
    def __rshift__(self, value: list):
        return self.__lshift__(value)

    # comparison operators are overloaded, so keep fields usable as dict keys
    __hash__ = object.__hash__
