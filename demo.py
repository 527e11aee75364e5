"""Small walkthrough: primary lookups, an eager index, update, drop."""
from idx import Secondary, new

users = [{"name": "Bob", "age": 20}, {"name": "Eve", "age": 27}, {"name": "John", "age": 45}]


def run():
    print("Building collection keyed by name")
    users_by_name = new(users, lambda u: u["name"])
    print(users_by_name.fetch_strict("Bob"))
    print("Creating index 'initial'")
    users_by_name = users_by_name.create_index("initial", lambda u: u["name"][0])
    print(users_by_name.fetch(Secondary("initial", "J")))
    print("Renaming Bob to Steve")
    users_by_name = users_by_name.update("Bob", lambda u: {**u, "name": "Steve"})
    print(users_by_name.fetch_strict("Steve"), users_by_name.fetch("Bob"))
    print("Dropping index 'initial'")
    users_by_name = users_by_name.drop_index("initial")
    print(users_by_name)
    return users_by_name


if __name__ == "__main__":
    run()
