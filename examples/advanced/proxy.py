"""
Recording proxy - method-missing in practice

The proxy defines almost nothing itself. Its AUTOLOAD receives every
unknown name (as the first argument), records it, and forwards the call
to the wrapped object. Because AUTOLOAD only runs on a root object, a
proxy inherited as a parent never intercepts anything.

Usage:
    target = counter()
    p = recorder(target)            # not a base: target is passed by keyword
    p('inc'); p('inc', 5)
    p('calls')                      # [('inc', ()), ('inc', (5,))]
"""

from closure_objects import factory


@factory
def recorder(this, *, target):
    calls = this.expose('calls', [])

    @this.method
    def AUTOLOAD(name, *args, **kwargs):
        calls.set(calls.get() + [(name, args)])
        return target(name, *args, **kwargs)

    @this.method
    def forget():
        calls.set([])
