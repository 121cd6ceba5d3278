import sys
import importlib.util

def check_required_imports(modules: list[str], pip_extras: str|None = None) -> None:
    """Exit with an installation hint if any of the required modules cannot be imported"""
    missing_modules = [ name for name in modules if importlib.util.find_spec(name) is None ]

    if missing_modules:
        print(f"Error: required modules not found: {', '.join(missing_modules)}")
        if pip_extras:
            print(f"Please run `pip install .[{pip_extras}]`")
        else:
            print("Please run `pip install .`")
        sys.exit(1)
