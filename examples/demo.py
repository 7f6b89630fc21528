"""Insert eight pairs, display the list, look two up and delete two."""
import logging

from pyskiplist import SkipList


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(message)s")

    sl = SkipList[int, str](6)
    sl.insert(1, "hello world")
    sl.insert(2, "first program")
    sl.insert(3, "glad to read the paper")
    sl.insert(5, "finish the code")
    sl.insert(8, "today summer")
    sl.insert(13, "2024/6/12")
    sl.insert(21, "tomorrow exam")
    sl.insert(34, "believe myself")

    print(f"skip list size: {sl.size()}")
    sl.display()

    sl.search(1)
    sl.search(34)

    sl.delete(8)
    sl.delete(21)

    print(f"skip list size: {sl.size()}")
    sl.display()


if __name__ == "__main__":
    main()
