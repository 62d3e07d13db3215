from psfsheet.scripts.psf2png import main

main()
