from typing import Union

import tether.database

# distinguishes `where('column', None)` from a call that omits the value
_unset = object()

class Query:
    """Container class for a SQL query.

    A query is essentially a container for various Expression types, which serialize themselves to SQL.
    Builder methods mutate the query in place and return it, so calls can be chained.
    """

    def __init__(self, model: type, database=None, where=None, order=None, limit=None):
        self.model = model
        self.database = database
        self.where_expression = where
        self.order_expression = order
        self.limit_expression = limit

    def _column(self, column: str):
        # only columns declared on the model can be referenced by name
        if column not in [field.column for field in self.model.__fields__]:
            raise ValueError('Unknown column "%s" on table "%s"' % (column, self.model.__table__))

        return column

    def _field_aliases(self, model=None, alias=None):
        # use query model by default
        if not model:
            model = self.model

        if not alias:
            alias = model.__table__

        # return a list of fields with aliases that can be used in a SQL query
        return [
            '"%s"."%s" as "%s.%s"' % (alias, field.column, alias, field.column)
            for field in model.__fields__
        ]

    def _pool(self):
        if self.database:
            return self.database

        if self.model.__database__:
            return self.model.__database__

        if tether.database.pool:
            return tether.database.pool

        raise RuntimeError('No database configured for "%s"; call tether.database.initialize first' %
            self.model.__table__)

    def _row_to_object(self, model: 'tether.model.Model', row, alias=None):
        if not alias:
            alias = model.__table__

        # iterate over fields defined in the model and extract them from the row dict
        data = {field.column: row['%s.%s' % (alias, field.column)] for field in model.__fields__}
        return model(**data)

    def _select_query(self):
        values = []

        # base select query
        query = 'select %s from "%s"' % (','.join(self._field_aliases()), self.model.__table__)

        # add where clause
        if self.where_expression is not None:
            where_query, where_values = self.where_expression.to_query()
            query += ' where %s' % where_query
            values += where_values

        if self.order_expression is not None:
            query += ' %s' % self.order_expression.to_query()

        if self.limit_expression is not None:
            limit_query, limit_values = self.limit_expression.to_query()
            query += ' %s' % limit_query
            values += limit_values

        return (query, values)

    def first(self):
        """Fetch the first matching row, or None if nothing matches.

        The query's own limit is left untouched, so it can still be run with `get()` afterwards.
        """

        previous = self.limit_expression
        self.limit_expression = LimitExpression(1)
        try:
            return self.get(one=True)
        finally:
            self.limit_expression = previous

    def get(self, one=False):
        query, values = self._select_query()
        rows = self._pool().query(query, values)
        result = [self._row_to_object(self.model, row) for row in rows]
        if one:
            return result[0] if len(result) > 0 else None

        return result

    def get_one(self):
        return self.first()

    def limit(self, n: int):
        self.limit_expression = LimitExpression(n)
        return self

    def on(self, database: 'tether.database.Pool'):
        self.database = database
        return self

    def order(self, fields: list, order=None):
        self.order_expression = OrderByExpression(fields, order)
        return self

    def to_query(self):
        """Serialize the query to a SQL string and its argument list without running it."""
        return self._select_query()

    def where(self, expression: Union['Expression', str], value=_unset):
        """Add a constraint to the query.

        Accepts either an expression (`Post.user_id == 5`) or a column name and a value (`'user_id', 5`), which
        is shorthand for an equality check. Repeated calls are AND-ed together.
        """

        if isinstance(expression, str):
            if value is _unset:
                raise TypeError('where() with a column name requires a value')

            expression = SingleColumnExpression(self.model, self._column(expression), '=', value)

        if self.where_expression is None:
            self.where_expression = expression
        else:
            self.where_expression = self.where_expression & expression

        return self

class Expression:
    """Expression base class.

    Each expression subclass is responsible for serializing itself into a query string.
    """

    def to_query(self):
        """Serialize expression to a SQL query string."""
        raise NotImplementedError()

class LimitExpression(Expression):
    """Expression containing a LIMIT clause."""

    def __init__(self, n: int):
        self.n = n

    def to_query(self):
        return ('limit %s', [self.n])

class OrderByExpression(Expression):
    """Expression containing a list of ORDER BY clauses."""

    def __init__(self, fields: Union[list, 'tether.field.Field'], order: str):
        if not isinstance(fields, list):
            fields = [fields]

        self.fields = fields
        self.order = order or 'asc'

    def to_query(self):
        return 'order by %s %s' % (','.join([
            '"%s"."%s"' % (field.model.__table__, field.column)
            for field in self.fields
        ]), self.order)

class SingleColumnExpression(Expression):
    """Expression containing a single column and value.

    Example SingleColumnExpressions are `id = 5` or `count > 3`.
    OR-ing or AND-ing two SingleColumnExpressions produces a MultiColumnExpression.
    """

    def __init__(self, model: 'tether.model.Model', column: str, comparison: str, value: Union[int, str, bool]):
        if value is None and comparison in ('=', '!='):
            comparison = 'is' if comparison == '=' else 'is not'

        self.model = model
        self.column = column
        self.comparison = comparison
        self.value = value

    def __or__(self, value: Expression):
        return MultiColumnExpression(self.model, self, value, 'or')

    def __and__(self, value: Expression):
        return MultiColumnExpression(self.model, self, value, 'and')

    def to_query(self):
        table = self.model.__table__
        if self.comparison == 'in':
            return (
                '"%s"."%s" %s (%s)' % (
                    table,
                    self.column,
                    self.comparison,
                    ','.join(['%s' for e in self.value])
                ),
                list(self.value)
            )

        if self.value is None:
            return ('"%s"."%s" %s null' % (table, self.column, self.comparison), [])

        return ('"%s"."%s" %s %%s' % (table, self.column, self.comparison), [self.value])

class MultiColumnExpression(Expression):
    """Expression containing a two SingleColumnExpressions.

    Example MultiColumnExpressions are `id = 5 OR count > 3`.
    OR-ing or AND-ing two MultiColumnExpressions produces a MultiColumnExpression.
    """

    def __init__(self, model: 'tether.model.Model', left: Expression, right: Expression, operator: str):
        self.model = model
        self.left = left
        self.right = right
        self.operator = operator

    def __or__(self, value: Expression):
        return MultiColumnExpression(self.model, self, value, 'or')

    def __and__(self, value: Expression):
        return MultiColumnExpression(self.model, self, value, 'and')

    def to_query(self):
        left_query, left_values = self.left.to_query()
        right_query, right_values = self.right.to_query()
        return ('(%s %s %s)' % (left_query, self.operator, right_query), left_values + right_values)
