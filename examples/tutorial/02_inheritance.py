"""
02_inheritance.py - overriding, SUPER and virtual calls

A bare call made through 'this' lands on the outermost object, so
animal.speak() picks up dog's sound(). 'this.super(...)' and 'SUPER::'
paths stay with the object whose body wrote them.
"""

from closure_objects import factory


@factory
def animal(this, name):
    this.expose('name', name)

    @this.method
    def sound():
        return '...'

    @this.method
    def speak():
        return f"{this('name')} says {this('sound')}"

    @this.method
    def kind():
        return 'animal'


@factory
def dog(this, name):
    this.inherit('animal', animal, name)

    @this.method
    def sound():
        return 'woof'

    @this.method
    def kind():
        return 'dog/' + this.super('kind')


@factory
def puppy(this, name):
    this.inherit('dog', dog, name)

    @this.method
    def sound():
        return 'yip ' + this('SUPER::sound')

    @this.method
    def kind():
        return 'puppy/' + this.super('kind')
