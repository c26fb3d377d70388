"""
Counter - the smallest useful object

- counter: 'inc' bumps a private count, 'value' exposes it read-only
- multi: two independent counters inherited as 'a' and 'b'

Usage:
    runtime = ObjectRuntime()
    runtime.load('examples/basics/counter.py')

    c = runtime.new('counter')
    c('inc'); c('inc')
    c('value')          # 2

    m = runtime.new('multi')
    m('a::inc')
    m('b::value')       # 0
"""

from closure_objects import factory


@factory
def counter(this, start=0):
    """Counts up from 'start'"""
    count = this.expose('value', start)

    @this.method
    def inc(step=1):
        count.set(count.get() + step)
        return count.get()


@factory
def multi(this):
    """Two counters, same factory, separate state"""
    this.inherit('a', counter)
    this.inherit('b', counter)

    @this.method
    def total():
        return this('a::value') + this('b::value')
