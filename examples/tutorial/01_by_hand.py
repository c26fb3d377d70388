"""
01_by_hand.py - building an object without @factory

create_object takes the two tables and the root flag. The tables are
filled after the call; the dispatcher sees every later addition.
"""

from closure_objects import StateCell, install

# Bind the constructor under a local name
install(globals(), 'new_object')


def account(*args):
    """Bank account; a leading base object makes it a delegate"""
    base = args[0] if args else None

    methods = {}
    parents = {}
    self = new_object(methods, parents, base is None, name='account')  # noqa: F821

    balance = StateCell(0)

    def deposit(amount):
        if amount <= 0:
            raise ValueError(f'Deposit must be positive: {amount}')
        balance.set(balance.get() + amount)
        return balance.get()

    def withdraw(amount):
        if amount > balance.get():
            raise ValueError('Insufficient funds')
        balance.set(balance.get() - amount)
        return balance.get()

    methods['deposit'] = deposit
    methods['withdraw'] = withdraw
    methods['balance'] = balance

    return self
