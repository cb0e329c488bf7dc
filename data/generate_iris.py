import csv
import os
import random

HEADER = ["sepal_length", "sepal_width", "petal_length", "petal_width", "species"]

# (mean, standard deviation) per feature for each species
SPECIES = {
    "setosa": [(5.0, 0.4), (3.5, 0.3), (1.4, 0.2), (0.2, 0.1)],
    "versicolor": [(6.0, 0.5), (2.8, 0.3), (4.5, 0.4), (1.3, 0.2)],
    "virginica": [(6.5, 0.6), (3.0, 0.3), (5.5, 0.4), (2.0, 0.2)],
}


def iris_rows(per_species=50, seed=0):
    """Seeded iris-like rows, species interleaved by a seeded shuffle."""
    rng = random.Random(seed)
    rows = []
    for species, params in SPECIES.items():
        for _ in range(per_species):
            rows.append([round(rng.gauss(mu, sigma), 2) for mu, sigma in params] + [species])
    rng.shuffle(rows)
    return rows


def generate_iris(path=None, seed=0, per_species=50, header=True):
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "iris.csv")
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        if header:
            writer.writerow(HEADER)
        writer.writerows(iris_rows(per_species, seed))
    return path


if __name__ == "__main__":
    print(generate_iris())
