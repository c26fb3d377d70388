"""
Shapes - multiple inheritance

A labelled square inherits from both 'shape' (geometry) and 'label'
(naming). Bare names search parents in registration order; qualified
names pick a parent explicitly when both define the same method.
"""

from closure_objects import factory


@factory
def shape(this, sides):
    this.expose('sides', sides)

    @this.method
    def area():
        raise NotImplementedError('area')

    @this.method
    def describe():
        return f"{this('sides')}-sided shape, area {this('area')}"


@factory
def label(this, text):
    this.expose('text', text)

    @this.method
    def describe():
        return f"'{this('text')}'"


@factory
def labelled_square(this, size, text):
    this.inherit('shape', shape, 4)
    this.inherit('label', label, text)

    @this.method
    def area():
        return size * size

    @this.method
    def describe():
        return this('shape::describe') + ' labelled ' + this('label::describe')
