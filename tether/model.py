import datetime
import decimal
import json
import msgpack

import tether.field
import tether.query
import tether.relation

class ModelType(type):
    """Metaclass for models.

    Attaches a few attributes to field and association definitions, like the column and model.
    """

    def __new__(cls, name, bases, namespace, **kwargs):
        namespace['__fields__'] = []
        namespace['__relations__'] = []

        class_instance = super().__new__(cls, name, bases, namespace)

        for column, field in namespace.items():
            if isinstance(field, tether.field.Field):
                # store the lvalue of the field definition in the field itself so we can reference it in queries
                # for example, if we have `id = Field()`, then we have `id.column == 'id'`
                field.column = column

                # store the model class so instances can be created from queries
                field.model = class_instance

                # store all fields defined on the model so we can serialize later
                namespace['__fields__'].append(field)

            if isinstance(field, tether.relation.Association):
                # for example, if we have `posts = has_many(...)`, then we have `posts.column == 'posts'`
                field.column = column
                field.model = class_instance

                # store all associations defined on the model so they can be looked up by name
                namespace['__relations__'].append(field)

        return class_instance

class Model(object, metaclass=ModelType):
    """Model definition.

    Each model corresponds to a database table.
    """

    __table__ = None
    __database__ = None

    def __init__(self, *args, **kwargs):
        # set all values given in constructor
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __getattribute__(self, attribute):
        # when accessing fields that haven't been set on instances, return None rather than a meta object
        result = object.__getattribute__(self, attribute)
        if isinstance(result, tether.field.Field):
            return None

        return result

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.to_dict())

    def _loaded(self):
        return self.__dict__.setdefault('_relations', {})

    def related(self, name: str, refresh=False):
        """Resolve the association called `name` and cache its results on this instance.

        Later calls return the cached value without querying, unless `refresh` is given.
        """

        loaded = self._loaded()
        if refresh or name not in loaded:
            if not isinstance(getattr(self.__class__, name, None), tether.relation.Association):
                raise AttributeError('%s has no association "%s"' % (self.__class__.__name__, name))

            loaded[name] = getattr(self, name).get_results()

        return loaded[name]

    def relation_loaded(self, name: str):
        return name in self._loaded()

    def set_relation(self, name: str, value):
        self._loaded()[name] = value

    def to_dict(self):
        result = {k: v for k, v in self.__dict__.items() if not k.startswith('_')}
        result.update(self._loaded())
        return result

    @classmethod
    def find(cls, ids, field=None):
        one = False
        if not isinstance(ids, list):
            ids = [ids]
            one = True

        if not field:
            field = cls.id

        if not ids:
            return {}

        result = cls.where(field << ids).get()
        if one:
            return result[0] if len(result) > 0 else None

        return {getattr(e, field.column): e for e in result}

    @classmethod
    def first(cls):
        return cls.query().first()

    @classmethod
    def get(cls):
        return cls.query().get()

    @classmethod
    def limit(cls, n):
        return cls.query().limit(n)

    @classmethod
    def on(cls, database):
        return tether.query.Query(cls, database=database)

    @classmethod
    def order(cls, fields: list, order=None):
        return cls.query().order(fields, order)

    @classmethod
    def query(cls):
        return tether.query.Query(cls)

    @classmethod
    def where(cls, *args):
        return cls.query().where(*args)

def serialize(data, format: str = 'json', pretty: bool = False):
    """Serialize a tether object to a string format."""
    def encode(obj):
        if isinstance(obj, tether.model.Model):
            return obj.to_dict()
        elif isinstance(obj, datetime.datetime):
            return int(obj.timestamp())
        elif isinstance(obj, datetime.date):
            return obj.isoformat()
        elif isinstance(obj, decimal.Decimal):
            return float(obj)
        elif hasattr(obj, 'serialize'):
            return obj.serialize()

        return obj

    if format == 'msgpack':
        return msgpack.packb(data, default=encode)

    if format == 'json':
        if pretty:
            return json.dumps(data, default=encode, indent=4)
        return json.dumps(data, default=encode)

    return data

def value(instance: Model, column: str):
    """Read a column value from a model instance.

    Lives outside the model so it can't be shadowed by a column of the same name. Declared fields that were never
    set read as None. Names that are neither declared nor set raise AttributeError, so a misspelled key is not
    mistaken for a null one.
    """

    data = object.__getattribute__(instance, '__dict__')
    if column in data:
        return data[column]

    if column in [field.column for field in type(instance).__fields__]:
        return None

    raise AttributeError('%s has no column "%s"' % (type(instance).__name__, column))
