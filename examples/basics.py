import logging

from fluxivity import (
    Computed,
    LoggingMiddleware,
    Reactive,
    ValidationMiddleware,
    memoize,
    reactive_list,
)

logging.basicConfig(level=logging.INFO, format="%(message)s")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Defining a reactive value")
print("-" * 100)
print()

# A Reactive holds one value and tells its subscribers about every change.
current_name = Reactive("Alice", name="current_name")

log_on_change = lambda snapshot: print(
    f"Name changed: {snapshot.old_value} -> {snapshot.new_value}"
)

# Subscribers immediately receive the current value as (value, value).
subscription = current_name.subscribe(log_on_change)
current_name.value = "Smith"

# Writing an equal value is a no-op.
current_name.value = "Smith"

# Disposing the subscription stops the notifications.
subscription.dispose()
current_name.value = "Bob"  # This will not be printed

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Combining reactive values")
print("-" * 100)
print()

first = Reactive("Charlie")
age = Reactive(30)

# A Computed derives its value from its sources and follows them.
summary = Computed([first, age], lambda s: f"{s[0].value} ({s[1].value})", name="summary")
summary.add_effect(lambda snapshot: print(f"Summary: {snapshot.new_value}"))

first.value = "Dana"
age.value = 31

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Batching updates")
print("-" * 100)
print()

counter = Reactive(0, name="counter")
counter.add_effect(lambda snapshot: print(f"Counter: {snapshot.new_value}"))

# Only the final value of a batch is published...
with counter.batch():
    for i in range(1, 6):
        counter.value = i

# ...unless every intermediate snapshot is requested.
with counter.batch(publish_all=True):
    counter.value = 10
    counter.value = 20

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Middleware")
print("-" * 100)
print()

# Middleware sees every accepted write and may veto the emission.
non_negative = ValidationMiddleware(lambda value: value >= 0, "must not be negative")
balance = Reactive(
    100,
    middlewares=[LoggingMiddleware(level=logging.INFO, label="balance"), non_negative],
    name="balance",
)
balance.add_effect(lambda snapshot: print(f"Balance published: {snapshot.new_value}"))

balance.value = 150
balance.value = -20  # Stored, but not published
print(f"Balance is now {balance.value}")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Reactive collections and memoization")
print("-" * 100)
print()

cart = reactive_list([3, 5, 8], name="cart")
total = memoize(Computed([cart], lambda s: sum(s[0].value), name="total"), cache_size=4)

print(f"Total: {total.value}")
cart.value = cart.value + [2]
print(f"Total: {total.value}")
cart.value = [3, 5, 8]
print(f"Total: {total.value}")  # Served from the cache
print(f"Cache stats: {total.get_stats()}")

total.dispose()
cart.dispose()
