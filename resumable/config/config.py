"""
Option descriptions and the Config objects filled from them.

An OptionDescription is a static tree of options.  A Config holds one
value per option and remembers who set it: 'default', 'user',
'cmdline' or 'required'.  A ChoiceOption can require values of other
options; a required value cannot be changed to something else later.
"""

import optparse

DEFAULT_OPTION_NAME = object()


class Config(object):
    _frozen = False

    def __init__(self, descr, parent=None, **overrides):
        self._descr = descr
        self._parent = parent
        self._owners = {}
        self._build(overrides)

    def _build(self, overrides):
        for child in self._descr._children:
            if isinstance(child, OptionDescription):
                self.__dict__[child._name] = Config(child, parent=self)
            else:
                self.__dict__[child._name] = child.default
                self._owners[child._name] = 'default'
        for path, value in overrides.items():
            subconfig, name = self._get_by_path(path)
            setattr(subconfig, name, value)

    def __setattr__(self, name, value):
        if name.startswith('_'):
            self.__dict__[name] = value
        else:
            self.setoption(name, value, 'user')

    def setoption(self, name, value, who):
        if self._frozen:
            raise TypeError("cannot change option %s of a frozen config" %
                            (name,))
        option = getattr(self._descr, name, None)
        if not isinstance(option, Option):
            raise ValueError('unknown option %s' % (name,))
        if self._owners[name] == 'required':
            if self.__dict__[name] != value:
                raise ValueError('option %s is required to be %s, cannot '
                                 'set it to %s' % (name, self.__dict__[name],
                                                   value))
            return
        option.setoption(self, value)
        self._owners[name] = who

    def require(self, name, value):
        self.setoption(name, value, 'required')

    def _get_by_path(self, path):
        "Return (config, name) for a dotted option path."
        steps = path.split('.')
        config = self
        for step in steps[:-1]:
            config = getattr(config, step)
        return config, steps[-1]

    def _get_toplevel(self):
        config = self
        while config._parent is not None:
            config = config._parent
        return config

    def freeze(self):
        """Make this config and all its groups read-only."""
        self._frozen = True
        for child in self._descr._children:
            if isinstance(child, OptionDescription):
                getattr(self, child._name).freeze()
        return self

    def __iter__(self):
        for child in self._descr._children:
            if isinstance(child, Option):
                yield child._name, getattr(self, child._name)

    def getpaths(self, prefix=''):
        "Return the dotted paths of all the options, groups excluded."
        paths = []
        for child in self._descr._children:
            if isinstance(child, OptionDescription):
                subconfig = getattr(self, child._name)
                paths += subconfig.getpaths(prefix + child._name + '.')
            else:
                paths.append(prefix + child._name)
        return paths


class Option(object):
    optparse_kwds = {}

    def __init__(self, name, doc, default, cmdline=DEFAULT_OPTION_NAME):
        self._name = name
        self.doc = doc
        self.default = default
        self.cmdline = cmdline

    def validate(self, value):
        raise NotImplementedError('abstract base class')

    def convert(self, value):
        return value

    def setoption(self, config, value):
        if not self.validate(value):
            raise ValueError('invalid value %r for option %s' %
                             (value, self._name))
        config.__dict__[self._name] = self.convert(value)

    def cmdline_value(self, value):
        return value

    def add_optparse_option(self, argnames, parser, config):
        def _callback(option, opt_str, value, parser):
            try:
                config.setoption(self._name, self.cmdline_value(value),
                                 'cmdline')
            except ValueError as e:
                raise optparse.OptionValueError(e.args[0])
        parser.add_option(*argnames, help=self.doc, action='callback',
                          callback=_callback, **self.optparse_kwds)


class ChoiceOption(Option):
    optparse_kwds = {'type': 'string'}

    def __init__(self, name, doc, values, default, requires=None,
                 cmdline=DEFAULT_OPTION_NAME):
        super(ChoiceOption, self).__init__(name, doc, default, cmdline)
        self.values = values
        # {value: [(path, required value), ...]}
        self._requires = requires or {}

    def validate(self, value):
        return value in self.values

    def setoption(self, config, value):
        toplevel = config._get_toplevel()
        for path, reqvalue in self._requires.get(value, []):
            subconfig, name = toplevel._get_by_path(path)
            subconfig.require(name, reqvalue)
        super(ChoiceOption, self).setoption(config, value)

    def cmdline_value(self, value):
        return value.strip()


class BoolOption(ChoiceOption):
    optparse_kwds = {}      # a flag, takes no argument

    def __init__(self, name, doc, default=True, requires=None,
                 cmdline=DEFAULT_OPTION_NAME):
        if requires is not None:
            requires = {True: requires}
        super(BoolOption, self).__init__(name, doc, [True, False], default,
                                         requires=requires, cmdline=cmdline)

    def cmdline_value(self, value):
        return True


class IntOption(Option):
    optparse_kwds = {'type': 'int'}

    def __init__(self, name, doc, default=0, cmdline=DEFAULT_OPTION_NAME):
        super(IntOption, self).__init__(name, doc, default, cmdline)

    def validate(self, value):
        try:
            int(value)
        except (TypeError, ValueError):
            return False
        return True

    def convert(self, value):
        return int(value)


class OptionDescription(object):
    def __init__(self, name, doc, children):
        self._name = name
        self.doc = doc
        self._children = children
        for child in children:
            setattr(self, child._name, child)


def to_optparse(config, useoptions=None, parser=None):
    """Return an optparse.OptionParser whose options set the values of
    'config'.  Options of a group go to an option group of the parser."""
    if parser is None:
        parser = optparse.OptionParser()
    if useoptions is None:
        useoptions = config.getpaths()
    groups = {}
    for path in useoptions:
        subconfig, name = config._get_by_path(path)
        option = getattr(subconfig._descr, name)
        if option.cmdline is None:
            continue
        if option.cmdline is DEFAULT_OPTION_NAME:
            argnames = ['--' + path.replace('.', '-')]
        else:
            argnames = option.cmdline.split()
        target = parser
        if subconfig is not config:
            grouppath = path.rsplit('.', 1)[0]
            target = groups.get(grouppath)
            if target is None:
                target = parser.add_option_group(subconfig._descr.doc)
                groups[grouppath] = target
        option.add_optparse_option(argnames, target, subconfig)
    return parser
