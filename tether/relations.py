import tether.model
import tether.relation

class BelongsTo(tether.relation.Relation):
    """The parent holds a foreign key referencing a single owner record.

    For a post belonging to a user, `foreign_key` is `user_id` on posts and `owner_key` is `id` on users:

        select ... from "users" where "users"."id" = %s limit %s
    """

    def __init__(self, query: 'tether.query.Query', parent: 'tether.model.Model', foreign_key: str, owner_key: str):
        super().__init__(query, parent)
        self._foreign_key = foreign_key
        self._owner_key = owner_key

    def constraint(self):
        return (self._owner_key, tether.model.value(self._parent, self._foreign_key))

    def foreign_key(self):
        return self._foreign_key

    def get_results(self):
        return self.first()

    def owner_key(self):
        return self._owner_key

class HasMany(tether.relation.Relation):
    """Any number of related records hold a foreign key referencing the parent.

    For a user with many posts, `foreign_key` is `user_id` on posts and `local_key` is `id` on users:

        select ... from "posts" where "posts"."user_id" = %s
    """

    def __init__(self, query: 'tether.query.Query', parent: 'tether.model.Model', foreign_key: str, local_key: str):
        super().__init__(query, parent)
        self._foreign_key = foreign_key
        self._local_key = local_key

    def constraint(self):
        return (self._foreign_key, tether.model.value(self._parent, self._local_key))

    def foreign_key(self):
        return self._foreign_key

    def get_results(self):
        return self.get()

    def local_key(self):
        return self._local_key

class HasOne(tether.relation.Relation):
    """A single related record holds a foreign key referencing the parent.

    Same constraint as HasMany, but resolves to the first match rather than a list.
    """

    def __init__(self, query: 'tether.query.Query', parent: 'tether.model.Model', foreign_key: str, local_key: str):
        super().__init__(query, parent)
        self._foreign_key = foreign_key
        self._local_key = local_key

    def constraint(self):
        return (self._foreign_key, tether.model.value(self._parent, self._local_key))

    def foreign_key(self):
        return self._foreign_key

    def get_results(self):
        return self.first()

    def local_key(self):
        return self._local_key

def belongs_to(related, foreign_key: str, owner_key: str = 'id'):
    """Declare that instances of this model belong to an instance of `related`."""
    return tether.relation.Association(BelongsTo, related, foreign_key, owner_key)

def has_many(related, foreign_key: str, local_key: str = 'id'):
    """Declare that instances of this model own any number of `related` instances."""
    return tether.relation.Association(HasMany, related, foreign_key, local_key)

def has_one(related, foreign_key: str, local_key: str = 'id'):
    """Declare that instances of this model own at most one `related` instance."""
    return tether.relation.Association(HasOne, related, foreign_key, local_key)
