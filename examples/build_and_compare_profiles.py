import sys

from Bio import SeqIO

from kmerprofile import Kmer, KmerFreq, Profile
from kmerprofile.misc.utils_lib import UtilsLib


def count_kmers(sequence, k, profile_id):
    profile = Profile(profile_id=profile_id)
    for i in range(len(sequence) - k + 1):
        profile.append(KmerFreq(Kmer(sequence[i : i + k]), 1))
    profile.normalize()
    profile.zip(delete_missing=True)
    profile.sort()
    return profile


print("Reading sequences")
records = list(SeqIO.parse(sys.argv[1], "fasta"))
k = int(sys.argv[2]) if len(sys.argv) > 2 else 3
path_export = sys.argv[3] if len(sys.argv) > 3 else "./"

### Profiles
print(f"Building {k}-mer profiles")
profiles = [count_kmers(str(record.seq), k, record.id) for record in records]

for profile in profiles:
    profile.save(f"{path_export}{profile.profile_id}.prf", "b")
    print(f"{profile.profile_id}: {profile.size} kmers")

### Distances
print("Computing rank distances")
matrix = UtilsLib.rank_distance_matrix(profiles)
matrix.to_csv(f"{path_export}rank_distances.csv")
print(matrix)
