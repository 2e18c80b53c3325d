from blocks_world.world.demo import main


if __name__ == "__main__":  # pragma: no cover
    main()
