# winget_reinstaller/__main__.py
import sys
import traceback

def main():
    try:
        from .main import run
        sys.exit(run())
    except SystemExit:
        raise
    except Exception as e:
        print("Fatal startup error:", e)
        traceback.print_exc()
        sys.exit(2)

if __name__ == "__main__":
    main()
