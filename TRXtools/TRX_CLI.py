import cltoolbox

from TRXtools.commands import massbalance, run


def main():
    cltoolbox.command(run)
    cltoolbox.command(massbalance)
    cltoolbox.main()


if __name__ == "__main__":
    main()
