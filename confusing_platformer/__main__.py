from confusing_platformer.game import main

if __name__ == "__main__":
    main()
