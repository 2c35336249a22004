from .app import PomodoroApp


def main() -> None:
    PomodoroApp().run()


if __name__ == "__main__":
    main()
