"""
Product tables and testability policy

Maps corpus content directories to products and lists which products have
automated test infrastructure. TESTABLE_PRODUCTS and MAYBE_TESTABLE_PRODUCTS
are disjoint.
"""

from typing import Dict, FrozenSet


CONTENT_DIR_TO_PRODUCT: Dict[str, str] = {
    "c-driver": "C",
    "cpp-driver": "C++",
    "csharp": "C#",
    "golang": "Go",
    "java": "Java (Sync)",
    "java-rs": "Java (Reactive Streams)",
    "kotlin": "Kotlin (Coroutine)",
    "kotlin-sync": "Kotlin (Sync)",
    "laravel-mongodb": "Laravel",
    "mongodb-shell": "MongoDB Shell",
    "node": "Node.js",
    "php-library": "PHP",
    "pymongo-arrow": "PyMongo Arrow",
    "pymongo-driver": "Python",
    "ruby-driver": "Ruby",
    "rust": "Rust",
    "scala-driver": "Scala",
    "swift": "Swift",
}


# Display names plus the raw option IDs the canonical specification may
# report for the same products.
TESTABLE_PRODUCTS: FrozenSet[str] = frozenset({
    "C#",
    "csharp",
    "Go",
    "go",
    "Java",
    "Java (Sync)",
    "java",
    "java-sync",
    "Node.js",
    "nodejs",
    "Python",
    "python",
    "MongoDB Shell",
    "mongosh",
})


# Script languages seen without a resolvable driver or shell context.
MAYBE_TESTABLE_PRODUCTS: FrozenSet[str] = frozenset({
    "JavaScript",
    "Shell",
})


def product_fromContentDir(content_dir: str) -> str:
    """Return the product for a content directory, or empty string"""
    return CONTENT_DIR_TO_PRODUCT.get(content_dir, "")


def testable_is(product: str) -> bool:
    return product in TESTABLE_PRODUCTS


def maybeTestable_is(product: str) -> bool:
    return product in MAYBE_TESTABLE_PRODUCTS
