"""Run with: python -m qz"""
from qz.main import main

if __name__ == "__main__":
    main()
