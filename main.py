from dispatch_advisor.cmd.main import main


if __name__ == "__main__":
    main()
