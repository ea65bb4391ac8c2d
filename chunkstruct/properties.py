import logging


logger = logging.getLogger(__name__)


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length'.

    The relation is defined in one direction for unpacking (the length field
    tells how many bytes to read) and must be reversed when the value is set
    (the length field gets updated with the actual size).

    The expression is a dotted path resolved starting from the father of the field
    holding the dependency; the leading '.' is optional.
    '''
    def __init__(self, expression):
        self.expression = expression

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        if instance.father is None:
            raise AttributeError(f'cannot resolve \'{self.expression}\' for a field without father')

        field = instance.father

        for component_name in self.expression.lstrip('.').split('.'):
            field = getattr(field, component_name)
            logger.debug(' resolved sub-component "%s" from "%s"' % (
                field.__class__.__name__, component_name))

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value

        logger.debug(' resolved \'%s\' with value %s' % (self.expression, value))

        return value

    def resolve_and_set(self, instance, value):
        '''Write back the value into the field the dependency points to.'''
        if instance.father is None:
            return

        self.resolve_field(instance).value = value
