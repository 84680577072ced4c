from gobin_info.main_cli import main

if __name__ == "__main__":
    main()
