'''
Machinery turning the class attributes of a Chunk into per-instance fields.

A field declared on the class is only a prototype: the first time it's
accessed from an instance a copy is made, with the instance as its father,
so that two chunks never share their values.
'''
import copy
import logging
from enum import Enum, auto


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """Gives to each chunk its own copy of the field."""

    def __init__(self, prototype: "Field", name: str):
        self.prototype = prototype
        self.prototype.name = name

    @property
    def name(self):
        return self.prototype.name

    def __get__(self, chunk, owner=None):
        if chunk is None:
            return self.prototype

        try:
            return chunk.__dict__[self.name]
        except KeyError:
            logger.debug("copying field '%s' for %s", self.name, owner.__name__)
            field = chunk.__dict__[self.name] = self.prototype.create(father=chunk)

            return field

    def __set__(self, chunk, value):
        # a field of the same kind replaces the current one
        if isinstance(value, self.prototype.__class__):
            value.father = chunk
            value.name = self.name
            chunk.__dict__[self.name] = value
            return

        self.__get__(chunk, chunk.__class__).value = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        if name in cls.__dict__:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """The names of the fields of a chunk, in declaration order (the
    fields of the parent classes come first)."""

    def __init__(self, inherited=()):
        self.fields = list(inherited)

    def add(self, name):
        if name not in self.fields:
            self.fields.append(name)


class MetaChunk(type):
    '''Inspired by how Django builds its models: the fields are removed
    from the class namespace and installed back as descriptors, remembering
    their order.'''

    def __new__(cls, name, bases, attrs):
        declared = {key: value for key, value in attrs.items() if isinstance(value, FieldBase)}
        namespace = {key: value for key, value in attrs.items() if key not in declared}

        new_cls = super().__new__(cls, name, bases, namespace)

        inherited = []
        for parent in bases:
            if isinstance(parent, MetaChunk):
                inherited.extend(_ for _ in parent._meta.fields if _ not in inherited)

        new_cls._meta = Meta(inherited)

        for field_name, field in declared.items():
            new_cls.add_field(field_name, field)

        return new_cls

    def add_field(cls, name, field):
        reserved = [_ for _ in cls.__mro__[1:] if name in _.__dict__ and not isinstance(_.__dict__[name], FieldDescriptor)]
        if reserved:
            raise AttributeError(f'field {name} of {cls.__name__} would hide {reserved[0].__name__}.{name}')

        logger.debug('adding field \'%s\' to %s', name, cls.__name__)
        field.contribute_to_chunk(cls, name)
        cls._meta.add(name)
