import logging

CREATED = 'created'
CONSTRAINED = 'constrained'
RESOLVED = 'resolved'

class RelationError(Exception):
    """Raised when a relation is used after it has been resolved."""

class Relation:
    """Base class for an object that resolves the records related to a single parent instance.

    A relation wraps a query for the related table. It moves through three states: `created` when constructed,
    `constrained` once the relation's where-clause has been added to the query, and `resolved` once the query
    has run. Constraints are added at most once, and a relation can only be resolved once; accessing the
    association on the model again builds a fresh relation.

    Subclasses define `constraint()`, returning the column and value that scope the query to the parent, and
    `get_results()`, which picks `first()` or `get()` depending on cardinality.
    """

    # query builder methods that can be called on the relation before it is resolved
    builder_methods = ('limit', 'on', 'order', 'where')

    def __init__(self, query: 'tether.query.Query', parent: 'tether.model.Model'):
        self._query = query
        self._parent = parent
        self._null_key = False
        self.state = CREATED

    def __getattr__(self, name):
        if name.startswith('_') or name not in self.builder_methods:
            raise AttributeError(name)

        method = getattr(self._query, name)

        def builder(*args, **kwargs):
            self._check_unresolved()
            result = method(*args, **kwargs)

            # keep chains on the relation, so `user.posts.where(...).get()` still applies the constraints
            if result is self._query:
                return self

            return result

        return builder

    def _check_unresolved(self):
        if self.state == RESOLVED:
            raise RelationError(
                '%s relation on %s has already been resolved' %
                (self.__class__.__name__, self._parent.__class__.__name__)
            )

    def _resolve(self):
        self._check_unresolved()
        self.add_constraints()
        self.state = RESOLVED

    def add_constraints(self):
        """Add the where-clause that scopes the query to the parent.

        Only the first call has any effect. If the parent's key is null, no clause is added and resolving the
        relation returns an empty result without running a query.
        """

        if self.state != CREATED:
            return

        column, value = self.constraint()
        if value is None:
            logging.debug('Skipping %s query for %s: parent key is null' % (
                self.__class__.__name__,
                self._parent.__class__.__name__
            ))
            self._null_key = True
        else:
            self._query.where(column, value)

        self.state = CONSTRAINED

    def constraint(self):
        """Return a (column, value) pair for the related table's where-clause."""
        raise NotImplementedError()

    def first(self):
        self._resolve()
        if self._null_key:
            return None

        return self._query.first()

    def get(self):
        self._resolve()
        if self._null_key:
            return []

        return self._query.get()

    def get_results(self):
        raise NotImplementedError()

    def parent(self):
        return self._parent

    def query(self):
        return self._query

class Association:
    """Declaration of a relation on a model class.

    Reading the attribute from a model instance builds a new relation for that instance, e.g. `user.posts`
    returns a fresh HasMany each time. The related model is given either directly or within a lambda, to avoid
    issues where classes aren't defined yet.
    """

    def __init__(self, relation_class: type, related, foreign_key: str, other_key: str):
        self.relation_class = relation_class
        self.related_model = related
        self.foreign_key = foreign_key
        self.other_key = other_key

        # set by the model metaclass
        self.column = None
        self.model = None

    def __get__(self, instance, owner):
        if instance is None:
            return self

        return self.relation(instance)

    def related(self):
        if isinstance(self.related_model, type):
            return self.related_model

        return self.related_model()

    def relation(self, instance: 'tether.model.Model'):
        return self.relation_class(self.related().query(), instance, self.foreign_key, self.other_key)
