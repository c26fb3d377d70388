"""
Test fixture: counter class file

- counter: increments a private count, exposes it as 'value'
- multi: two independent counters inherited as 'a' and 'b'
- pair: builds two root counters through the injected runtime
"""

from closure_objects import factory

# Injected by ObjectRuntime.load()
_runtime = None


@factory
def counter(this, start=0):
    count = this.expose('value', start)

    @this.method
    def inc(step=1):
        count.set(count.get() + step)
        return count.get()

    @this.method
    def reset():
        count.set(start)


@factory
def multi(this):
    this.inherit('a', counter)
    this.inherit('b', counter)

    @this.method
    def total():
        return this('a::value') + this('b::value')


@factory
def pair(this):
    first = _runtime.new('counter')
    second = _runtime.new('counter', 10)

    this['first'] = lambda: first('value')
    this['second'] = lambda: second('value')
    this['bump'] = lambda: (first('inc'), second('inc'))
