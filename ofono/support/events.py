import logging

logger = logging.getLogger(__name__)


class EventHook(object):
    """ An ordered list of handlers. Handlers are called synchronously, in the order they were added.
        A handler that raises is logged and does not stop delivery to the handlers after it. """

    def __init__(self):
        self.__handlers = []

    def __iadd__(self, handler):
        self.__handlers.append(handler)
        return self

    def __isub__(self, handler):
        self.__handlers.remove(handler)
        return self

    def __len__(self):
        return len(self.__handlers)

    def fire(self, *args, **keywargs):
        for handler in list(self.__handlers):
            try:
                handler(*args, **keywargs)
            except Exception as e:
                logger.exception("event handler %r failed: %s", handler, e)

    def clear_object_handlers(self, inObject):
        self.__handlers = [h for h in self.__handlers if getattr(h, '__self__', None) is not inObject]

    def clear(self):
        self.__handlers = []

    def fire_all(self, events):
        for e in events:
            self.fire(e)


class Events(object):
    """ A named set of event hooks owned by a single source.

    >>> events = Events('change', 'removed')
    >>> sorted(events.kinds)
    ['change', 'removed']
    """

    def __init__(self, *kinds):
        self._hooks = dict((kind, EventHook()) for kind in kinds)

    @property
    def kinds(self):
        return self._hooks.keys()

    def __getattr__(self, kind):
        hooks = self.__dict__.get('_hooks')
        if hooks is None or kind not in hooks:
            raise AttributeError("no such event kind '%s'" % kind)
        return hooks[kind]

    def __setattr__(self, name, value):
        # `events.change += handler` rebinds the attribute to the same hook
        if name != '_hooks' and name in self._hooks:
            if value is not self._hooks[name]:
                raise AttributeError("event kind '%s' cannot be replaced" % name)
            return
        super().__setattr__(name, value)

    def subscribe(self, kind, handler):
        hook = getattr(self, kind)
        hook += handler
        return handler

    def unsubscribe(self, kind, handler):
        hook = getattr(self, kind)
        hook -= handler

    def clear(self):
        for hook in self._hooks.values():
            hook.clear()
