from time import sleep

from lazyiter import Pipeline
from utils import configure_logging, measure_performance, describe_pipeline

configure_logging()


def expensive_transform(x, i):
    # Simulate a costly step so laziness is visible
    print(f"  computing f({x}) at index {i} ...")
    sleep(0.05)
    return x * x


print("\n--- Demo: laziness (no work until iterated) ---")
data = list(range(1, 10_000))
pipeline = (
    Pipeline(data)
    .map(expensive_transform)
    .filter(lambda v, i: v % 2 == 0)
    .take(8)
)

print(f"Constructed {pipeline!r}. Nothing computed yet.")
print(describe_pipeline(pipeline).model_dump())

print("\nCollecting (take(8) stops the pass once 8 values are yielded):")
report = measure_performance("collect", pipeline.collect)
print(f"Result: {report.result}")
print(f"Time: {report.execution_time_ms:.2f}ms\n")

print("--- Demo: cloning branches a pipeline ---")
base = Pipeline([1, 2, 3, 4, 5])
doubled = base.clone().map(lambda v, i: v * 2)
print(f"base:    {base.collect()}")
print(f"doubled: {doubled.collect()}\n")

print("--- Demo: consumers ---")
numbers = Pipeline([1, 2, 3, 4, 5])
print("sum:", numbers.reduce(lambda acc, v, i: acc + v, 0))
print("first > 3:", numbers.find(lambda v, i: v > 3))
print("indexes of Pipeline(5):", Pipeline(5).map(lambda _, i: i).collect())
